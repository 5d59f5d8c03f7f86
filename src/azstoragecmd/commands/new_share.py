from azstoragecmd.storage import AzureShareHandle
from .base import StorageCommand


class NewShareCommand(StorageCommand):
    """Create a file share."""

    command_name = "new-share"

    def __init__(self, name: str, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.name = name

    def _execute(self) -> AzureShareHandle:
        share = self.share_from_name(self.name)
        self.verbose(f"Creating share [{self.name}]")
        share.create()
        return share
