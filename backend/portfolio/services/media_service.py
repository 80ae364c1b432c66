"""
Portfolio API — Media Upload Signature Service
===============================================

What:  Issues signed upload parameters for the media host (Cloudinary).
How:   The admin UI uploads directly to Cloudinary; this service only signs
       `folder=<folder>&timestamp=<ts>` with the API secret so the secret
       never leaves the server.

Signature:
    sha1("folder=portfolio&timestamp=1718000000" + api_secret).hexdigest()
    Cloudinary rejects signatures older than one hour.
"""

import hashlib
import time
from typing import Callable, Optional

from portfolio.config import Settings
from portfolio.schemas.common import UploadSignatureResponse

DEFAULT_RESOURCE_TYPE = "image"


class MediaSignatureService:

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "portfolio",
        clock: Callable[[], float] = time.time,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self._clock = clock

    @classmethod
    def from_settings(cls, config: Settings) -> "MediaSignatureService":
        return cls(
            cloud_name=config.cloudinary_cloud_name,
            api_key=config.cloudinary_api_key,
            api_secret=config.cloudinary_api_secret,
            folder=config.cloudinary_upload_folder,
        )

    def sign(self, params: str) -> str:
        """Hex SHA-1 of the serialized parameters followed by the secret."""
        return hashlib.sha1((params + self.api_secret).encode("utf-8")).hexdigest()

    def sign_upload(self, resource_type: Optional[str] = None) -> UploadSignatureResponse:
        timestamp = int(self._clock())
        params = f"folder={self.folder}&timestamp={timestamp}"
        return UploadSignatureResponse(
            signature=self.sign(params),
            timestamp=timestamp,
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            folder=self.folder,
            resource_type=resource_type or DEFAULT_RESOURCE_TYPE,
        )
