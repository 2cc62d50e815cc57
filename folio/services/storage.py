"""Supabase Storage for scanned page images.

Every image lives in one bucket (STORAGE_BUCKET, default 'page-images')
under 'images/'. A page group stores the public URL and the blob id, which is
the object name inside 'images/', so the image can be removed with the group.

Failures never raise: both operations return an error message instead and
the caller decides whether that matters.
"""

import logging
import time
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

IMAGE_FOLDER = 'images'
DEFAULT_BUCKET = 'page-images'


def build_image_path(file_name: str, original_name: str, timestamp_ms: int) -> str:
    """'images/{file_name}-{timestamp}.{ext}', ext taken from the uploaded name."""
    ext = original_name.rsplit('.', 1)[-1].lower() if '.' in original_name else 'jpg'
    return f'{IMAGE_FOLDER}/{file_name}-{timestamp_ms}.{ext}'


class SupabaseImageStore:
    """Page image store backed by a Supabase Storage bucket."""

    def __init__(self, url: str = '', service_key: str = '', bucket: str = DEFAULT_BUCKET):
        self.url = url
        self.service_key = service_key
        self.bucket = bucket or DEFAULT_BUCKET
        self._client = None

    @classmethod
    def from_config(cls, config):
        return cls(
            url=config.get('SUPABASE_URL', ''),
            service_key=config.get('SUPABASE_SERVICE_KEY', ''),
            bucket=config.get('STORAGE_BUCKET', DEFAULT_BUCKET),
        )

    def _get_client(self):
        """Create the Supabase client on first use."""
        if self._client is None:
            if not self.url or not self.service_key:
                logger.warning('Supabase credentials not configured. Page images will not be stored.')
                return None

            try:
                from supabase import create_client
                self._client = create_client(self.url, self.service_key)
                logger.info('Supabase client initialized successfully')
            except Exception as e:
                logger.error(f'Failed to initialize Supabase client: {e}')
                return None

        return self._client

    def is_storage_configured(self) -> bool:
        return self._get_client() is not None

    def upload_page_image(
        self,
        file_data: bytes,
        file_name: str,
        original_name: str,
        content_type: str = 'image/jpeg'
    ) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        """Upload a page image.

        Args:
            file_data: Raw image bytes
            file_name: Page group file name, used as the object name prefix
            original_name: Uploaded file name, for the extension
            content_type: Detected MIME type

        Returns:
            (public_url, blob_id, None) on success, (None, None, error) otherwise
        """
        client = self._get_client()
        if client is None:
            return None, None, 'Storage service not configured'

        path = build_image_path(file_name, original_name, int(time.time() * 1000))
        bucket = client.storage.from_(self.bucket)
        try:
            logger.info(f'Uploading page image to {self.bucket}/{path} ({content_type}, {len(file_data)} bytes)')
            bucket.upload(path=path, file=file_data, file_options={'content-type': content_type})
            public_url = bucket.get_public_url(path)
        except Exception as e:
            logger.error(f'Page image upload to {self.bucket}/{path} failed: {e}')
            return None, None, str(e)

        return public_url, path.rsplit('/', 1)[-1], None

    def delete_page_image(self, blob_id: str) -> Tuple[bool, Optional[str]]:
        """Remove a page image by blob id. Returns (deleted, error)."""
        client = self._get_client()
        if client is None:
            return False, 'Storage service not configured'

        path = f'{IMAGE_FOLDER}/{blob_id}'
        try:
            client.storage.from_(self.bucket).remove([path])
        except Exception as e:
            logger.error(f'Page image delete of {self.bucket}/{path} failed: {e}')
            return False, str(e)

        logger.info(f'Page image deleted: {blob_id}')
        return True, None
