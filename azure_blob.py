import logging
import os
import uuid
from dataclasses import dataclass
from typing import BinaryIO, Optional, Protocol

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings

from config import Settings
from utils.errors import UpstreamFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredObject:
     url: str
     public_id: str


class ObjectStore(Protocol):
     """What the media gateway needs from an external file host."""

     def upload(self, data: BinaryIO, filename: str, folder: str, content_type: Optional[str] = None) -> StoredObject:
          ...

     def delete(self, public_id: str) -> None:
          ...


class AzureBlobStore:
     """
     Azure Blob Storage backend. The blob name doubles as the public id,
     e.g. "rentfit/properties/12/3f0c...e1.jpg".
     """

     def __init__(self, account: str, key: str, container: str):
          self.account = account
          self.container = container
          self.blob_service = BlobServiceClient.from_connection_string(
               f"DefaultEndpointsProtocol=https;"
               f"AccountName={account};"
               f"AccountKey={key};"
               f"EndpointSuffix=core.windows.net"
          )

     def upload(self, data: BinaryIO, filename: str, folder: str, content_type: Optional[str] = None) -> StoredObject:
          ext = os.path.splitext(filename or "")[1].lower()
          blob_name = f"{folder.strip('/')}/{uuid.uuid4().hex}{ext}"
          blob_client = self.blob_service.get_blob_client(container=self.container, blob=blob_name)
          try:
               blob_client.upload_blob(
                    data,
                    overwrite=True,
                    content_settings=ContentSettings(content_type=content_type) if content_type else None,
               )
          except AzureError as exc:
               logger.error("Blob upload failed", extra={"public_id": blob_name})
               raise UpstreamFailure("File upload failed") from exc
          return StoredObject(url=blob_client.url, public_id=blob_name)

     def delete(self, public_id: str) -> None:
          """
          Deletes a blob by its public id. A missing blob counts as deleted so
          callers can safely retry.
          """
          blob_client = self.blob_service.get_blob_client(container=self.container, blob=public_id)
          try:
               blob_client.delete_blob()
          except ResourceNotFoundError:
               logger.info("Blob already absent", extra={"public_id": public_id})
          except AzureError as exc:
               logger.error("Blob delete failed", extra={"public_id": public_id})
               raise UpstreamFailure("File delete failed") from exc


def create_object_store(settings: Settings) -> Optional[AzureBlobStore]:
     if not (settings.azure_storage_account and settings.azure_storage_key):
          logger.warning("Azure storage not configured; media uploads are disabled")
          return None
     return AzureBlobStore(
          account=settings.azure_storage_account,
          key=settings.azure_storage_key,
          container=settings.azure_storage_container,
     )
