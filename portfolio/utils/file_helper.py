import secrets
import string
import time

from werkzeug.utils import secure_filename

_BASE36 = string.digits + string.ascii_lowercase


def get_file_extension(filename, mimetype=None):
    """从文件名获取扩展名，文件名没有扩展名时退回到 MIME 子类型"""
    if filename and '.' in filename:
        return filename.rsplit('.', 1)[1].lower()
    if mimetype and '/' in mimetype:
        subtype = mimetype.split('/', 1)[1].split(';', 1)[0].split('+', 1)[0].strip().lower()
        return {'jpeg': 'jpg'}.get(subtype, subtype) or None
    return None


def random_token(length=11):
    """随机 base36 字符串"""
    return ''.join(secrets.choice(_BASE36) for _ in range(length))


def generate_unique_filename(ext):
    """生成唯一文件名：<毫秒时间戳>-<随机串>.<扩展名>"""
    name = f'{int(time.time() * 1000)}-{random_token()}'
    return f'{name}.{ext}' if ext else name


def safe_folder(folder, default='uploads'):
    """存储文件夹名只保留安全字符"""
    folder = secure_filename(folder or '')
    return folder or default


def format_size(size):
    """将字节转换为易读格式 (KB, MB)"""
    power = 2**10
    n = 0
    power_labels = {0: '', 1: 'K', 2: 'M', 3: 'G', 4: 'T'}
    while size > power and n < 4:
        size /= power
        n += 1
    return f"{size:.1f} {power_labels[n]}B"
