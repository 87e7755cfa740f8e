"""
对象存储工具模块
图片统一存放在一个 bucket 中，按文件夹前缀 (blog / artwork / photos) 区分用途
"""
import logging

logger = logging.getLogger(__name__)


def storage_path_from_url(public_url, default_folder=None):
    """
    从公开 URL 还原存储路径
    URL 格式: https://<project>.supabase.co/storage/v1/object/public/<bucket>/<folder>/<filename>
    """
    if not public_url:
        return None
    parts = public_url.split('?', 1)[0].rstrip('/').split('/')
    filename = parts[-1]
    folder = parts[-2] if len(parts) > 1 and parts[-2] else default_folder
    if not filename:
        return None
    return f'{folder}/{filename}' if folder else filename


def remove_from_storage(client, bucket, public_url, default_folder=None):
    """
    删除公开 URL 对应的存储文件
    失败只记录日志，不影响后续的数据库删除

    Returns:
        bool: 是否删除成功
    """
    file_path = storage_path_from_url(public_url, default_folder)
    if not file_path:
        return False
    logger.info(f'Deleting file from storage: {file_path}')
    try:
        client.storage.from_(bucket).remove([file_path])
    except Exception as e:
        logger.error(f'❌ Storage deletion error for {file_path}: {e}')
        return False
    return True
