"""Settings used when publishing a cloud service package."""
from __future__ import annotations
import dataclasses
import datetime
import pathlib
import typing as t
from urllib.parse import urlparse


@dataclasses.dataclass
class ServiceSettings:

    slot: str = "Production"
    subscription: t.Optional[str] = None


def default_deployment_name(slot: str, now: t.Optional[datetime.datetime] = None) -> str:
    """Build a deployment name like 'p2024-05-01-13-45-10-1234' from the slot and time."""
    if now is None:
        now = datetime.datetime.now()
    return f"{slot[0].lower()}{now.strftime('%Y-%m-%d-%H-%M-%S')}-{now.microsecond // 100:04d}"


def is_storage_account_url(package_path: str) -> bool:
    """Check if the package path is a URL to a blob in a storage account."""
    try:
        parts = urlparse(package_path)
        return (
            parts.scheme.lower() in ("http", "https")
            and parts.hostname is not None
            and parts.hostname.lower().endswith("blob.core.windows.net")
        )
    except Exception:
        # Anything that cannot be parsed is treated as a local path
        return False


class PublishContext:

    def __init__(self,
                 settings: ServiceSettings,
                 package_path: str,
                 cloud_config_path: t.Union[str, pathlib.Path],
                 service_name: str,
                 deployment_name: t.Optional[str] = None,
                 root_path: t.Optional[str] = None,
                 subscriptions: t.Optional[t.Mapping[str, str]] = None):
        if settings is None:
            raise ValueError("Invalid service settings")
        if not package_path:
            raise ValueError("package_path must not be empty")
        if cloud_config_path is None or not pathlib.Path(cloud_config_path).is_file():
            raise FileNotFoundError(f"Service configuration file [{cloud_config_path}] not found")
        if not service_name:
            raise ValueError("service_name must not be empty")
        self.service_settings = settings
        self.package_path = package_path
        self.cloud_config_path = str(cloud_config_path)
        self.root_path = root_path
        self.service_name = service_name
        self.deployment_name = deployment_name or default_deployment_name(settings.slot)
        self.package_is_from_storage_account = False
        if not settings.subscription:
            raise ValueError("Subscription name must be set in the service settings")
        subscriptions = subscriptions or {}
        if settings.subscription not in subscriptions:
            raise ValueError(f"Subscription [{settings.subscription}] not found")
        self.subscription_id = subscriptions[settings.subscription]

    def config_package_settings(self, package: str, working_directory: t.Union[str, pathlib.Path]):
        """Point the context at a package, either a storage URL or a local path."""
        self.package_path = package
        self.package_is_from_storage_account = is_storage_account_url(package)
        if not self.package_is_from_storage_account:
            path = pathlib.Path(package)
            if not path.is_absolute():
                self.package_path = str(pathlib.Path(working_directory) / path)
