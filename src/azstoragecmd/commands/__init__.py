from .base import StorageCommand, CommandResult, convert_timeout
from .new_share import NewShareCommand
from .set_file_content import SetFileContentCommand, ShareName, ShareHandle, DirectoryHandle
from .publish import PublishContext, ServiceSettings, is_storage_account_url
