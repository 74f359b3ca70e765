# company_api/services/assets.py
import io
import logging
import mimetypes
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import boto3
import cloudinary
import cloudinary.uploader
import httpx
from botocore.exceptions import BotoCoreError, ClientError
from cloudinary.exceptions import Error as CloudinaryError

from company_api.config import Settings
from company_api.exceptions import BadRequestError, ServiceUnavailableError

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("http://", "https://")

DEFAULT_MAX_BYTES = 5 * 1024 * 1024


@dataclass
class AssetSource:
    """
    An image to host: either bytes received in a multipart upload, or a
    remote http(s) URL sent as ``filePath``.
    """
    content: Optional[bytes] = None
    mime_type: Optional[str] = None
    filename: Optional[str] = None
    location: Optional[str] = None

    @property
    def is_buffer(self) -> bool:
        return self.content is not None

    @property
    def extension(self) -> str:
        name = self.filename or self.location or ""
        if "." in name.rsplit("/", 1)[-1]:
            return "." + name.rsplit(".", 1)[-1].lower().split("?")[0]
        return mimetypes.guess_extension(self.mime_type or "") or ""


@dataclass
class UploadedAsset:
    url: str
    public_id: str


class AssetUploader(ABC):
    """Hosts logo and banner images and returns their public URL"""

    @abstractmethod
    def upload_image(self, source: AssetSource, folder: str) -> UploadedAsset:
        """Upload an image into ``folder``"""


def _check_source(source: AssetSource):
    if source.is_buffer:
        if not source.content:
            raise BadRequestError("Invalid buffer provided for image upload")
    elif not source.location:
        raise BadRequestError("No image source provided")
    elif not source.location.lower().startswith(REMOTE_SCHEMES):
        raise BadRequestError("Image source must be an http(s) URL")


class CloudinaryAssetUploader(AssetUploader):
    def __init__(self, cloud_name: Optional[str], api_key: Optional[str], api_secret: Optional[str]):
        self.configured = bool(cloud_name and api_key and api_secret)
        if self.configured:
            cloudinary.config(
                cloud_name=cloud_name,
                api_key=api_key,
                api_secret=api_secret,
                secure=True
            )

    def upload_image(self, source: AssetSource, folder: str) -> UploadedAsset:
        if not self.configured:
            logger.error("Cloudinary configuration is incomplete")
            raise ServiceUnavailableError(
                "Cloudinary configuration is incomplete. Please check your environment variables."
            )
        _check_source(source)

        file = io.BytesIO(source.content) if source.is_buffer else source.location
        logger.info(f"Uploading {'buffer' if source.is_buffer else 'url'} to Cloudinary folder {folder}")
        try:
            result = cloudinary.uploader.upload(
                file,
                folder=folder,
                resource_type="image",
                overwrite=True,
                transformation=[{"quality": "auto", "fetch_format": "auto"}],
            )
        except CloudinaryError as e:
            logger.error(f"Cloudinary rejected upload: {e}")
            raise BadRequestError(f"Image upload failed: {e}")
        except Exception as e:
            logger.error(f"Cloudinary upload failed: {e}")
            raise ServiceUnavailableError(f"Image upload failed: {e}")

        logger.info(f"✅ Cloudinary upload successful: {result['public_id']}")
        return UploadedAsset(url=result["secure_url"], public_id=result["public_id"])


class S3AssetUploader(AssetUploader):
    def __init__(
        self,
        bucket: str,
        region: str,
        s3_client=None,
        http_client: Optional[httpx.Client] = None,
        max_bytes: int = DEFAULT_MAX_BYTES
    ):
        self.bucket = bucket
        self.region = region
        self.s3_client = s3_client or boto3.client('s3', region_name=region)
        self.http_client = http_client or httpx.Client(follow_redirects=True, timeout=10.0)
        self.max_bytes = max_bytes

    def _read_location(self, location: str) -> tuple:
        """
        Fetch a remote image: bytes and content type.

        The body is read in chunks and abandoned once it exceeds ``max_bytes``.
        """
        try:
            with self.http_client.stream("GET", location) as response:
                response.raise_for_status()
                mime_type = response.headers.get("content-type", "").split(";")[0].strip()
                if not mime_type.startswith("image/"):
                    raise BadRequestError("Only image files are allowed")

                content = bytearray()
                for chunk in response.iter_bytes():
                    content.extend(chunk)
                    if len(content) > self.max_bytes:
                        raise BadRequestError(
                            f"File too large. Maximum size is {self.max_bytes // (1024 * 1024)}MB"
                        )
        except httpx.HTTPError as e:
            raise BadRequestError(f"Image upload failed: could not fetch {location}: {e}")

        if not content:
            raise BadRequestError("Uploaded file is empty")
        return bytes(content), mime_type

    def upload_image(self, source: AssetSource, folder: str) -> UploadedAsset:
        _check_source(source)

        if source.is_buffer:
            body, mime_type = source.content, source.mime_type
        else:
            body, mime_type = self._read_location(source.location)

        s3_key = f"{folder}/{uuid.uuid4().hex}{source.extension}"
        try:
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=s3_key,
                Body=body,
                ContentType=mime_type or "application/octet-stream"
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 upload failed: {e}")
            raise ServiceUnavailableError(f"Image upload failed: {e}")

        logger.info(f"✅ S3 upload successful: {s3_key}")
        return UploadedAsset(
            url=f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{s3_key}",
            public_id=s3_key
        )


class MockAssetUploader(AssetUploader):
    """Returns stable fake URLs without contacting any host"""

    def __init__(self, base_url: str = "https://assets.local"):
        self.base_url = base_url.rstrip("/")
        self.uploads = []

    def upload_image(self, source: AssetSource, folder: str) -> UploadedAsset:
        _check_source(source)
        public_id = f"{folder}/{uuid.uuid4().hex}"
        logger.info(f"🔧 MOCK: Uploading image to {public_id}")
        self.uploads.append((source, folder))
        return UploadedAsset(url=f"{self.base_url}/{public_id}{source.extension}", public_id=public_id)


def build_asset_uploader(settings: Settings) -> AssetUploader:
    """Pick the image host for this process"""
    provider = settings.ASSET_PROVIDER.lower()
    if provider == "mock":
        logger.warning("🔧 Using MOCK asset uploader - images are not stored anywhere!")
        return MockAssetUploader()
    if provider == "s3":
        return S3AssetUploader(
            settings.ASSETS_BUCKET,
            settings.AWS_REGION,
            max_bytes=settings.MAX_UPLOAD_BYTES
        )
    if provider == "cloudinary":
        if not settings.cloudinary_configured:
            logger.error("CRITICAL: Cloudinary configuration is incomplete! Uploads will fail.")
        return CloudinaryAssetUploader(
            settings.CLOUDINARY_CLOUD_NAME,
            settings.CLOUDINARY_API_KEY,
            settings.CLOUDINARY_API_SECRET
        )
    raise ValueError(f"Unknown ASSET_PROVIDER: {settings.ASSET_PROVIDER}")
