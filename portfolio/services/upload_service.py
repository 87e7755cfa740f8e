"""
图片上传助手
本地校验大小与类型 -> 上传到对象存储的指定文件夹 -> 返回公开 URL

每次调用的状态流转:
    idle -> validating -> uploading -> success (preview_url) | error (error)
success / error 都是静止状态，可以直接开始下一次上传。
每次请求新建一个 ImageUploader；同一会话共用一把锁 (UploadLocks)，
同一会话同一时刻只允许一个上传，不排队、不重试、开始后不可取消。
"""
import logging
import threading

from portfolio.exceptions import UploadError
from portfolio.utils.file_helper import (
    generate_unique_filename, get_file_extension, safe_folder,
)
from portfolio.utils.storage import remove_from_storage

logger = logging.getLogger(__name__)

STATE_IDLE = 'idle'
STATE_VALIDATING = 'validating'
STATE_UPLOADING = 'uploading'
STATE_SUCCESS = 'success'
STATE_ERROR = 'error'

FOLDER_BLOG = 'blog'
FOLDER_ARTWORK = 'artwork'
FOLDER_PHOTOS = 'photos'
UPLOAD_FOLDERS = (FOLDER_BLOG, FOLDER_ARTWORK, FOLDER_PHOTOS)


class UploadLocks:
    """按会话分配的上传锁"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = {}

    def for_key(self, key):
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())


class ImageUploader:
    """图片上传助手"""

    def __init__(self, client, bucket='images', max_size_mb=5, in_flight=None):
        self.client = client
        self.bucket = bucket
        self.max_size_mb = max_size_mb
        self.state = STATE_IDLE
        self.error = None
        self.preview_url = None
        self._in_flight = threading.Lock() if in_flight is None else in_flight

    def validate(self, file, max_size_mb=None):
        """
        本地校验，不发起任何网络请求
        Returns:
            (data, content_type, ext)
        """
        if file is None or not getattr(file, 'filename', None):
            raise UploadError('No file selected')

        limit_mb = self.max_size_mb if max_size_mb is None else max_size_mb
        data = file.read()
        if len(data) > limit_mb * 1024 * 1024:
            raise UploadError(f'File size must be less than {limit_mb}MB')

        content_type = getattr(file, 'mimetype', None) or getattr(file, 'content_type', None) or ''
        if not content_type.startswith('image/'):
            raise UploadError('Please upload an image file')

        return data, content_type, get_file_extension(file.filename, content_type)

    def upload(self, file, folder='uploads', max_size_mb=None):
        """上传一张图片并返回公开 URL；失败抛出 UploadError，错误信息同时保存在 self.error"""
        if not self._in_flight.acquire(blocking=False):
            raise UploadError('Another upload is already in progress')
        try:
            self.error = None
            self.state = STATE_VALIDATING
            try:
                data, content_type, ext = self.validate(file, max_size_mb)

                self.state = STATE_UPLOADING
                file_path = f'{safe_folder(folder)}/{generate_unique_filename(ext)}'
                bucket = self.client.storage.from_(self.bucket)
                bucket.upload(file_path, data, file_options={
                    'content-type': content_type,
                    'cache-control': '3600',
                    'upsert': 'false',
                })
                public_url = bucket.get_public_url(file_path)
            except UploadError as e:
                self._fail(e.message)
                raise
            except Exception as e:
                logger.error(f'❌ Upload error: {e}')
                self._fail(str(e) or 'Failed to upload image')
                raise UploadError(self.error) from e

            self.preview_url = public_url
            self.state = STATE_SUCCESS
            logger.info(f'✅ Image uploaded: {public_url}')
            return public_url
        finally:
            self._in_flight.release()

    def remove_by_public_url(self, public_url):
        """删除已上传的图片 (失败仅记录)"""
        removed = remove_from_storage(self.client, self.bucket, public_url)
        if removed and public_url == self.preview_url:
            self.preview_url = None
        return removed

    def _fail(self, message):
        self.error = message
        self.state = STATE_ERROR
