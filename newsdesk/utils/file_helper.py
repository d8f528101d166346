import os
import time
import uuid

ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg'}


def get_file_extension(filename):
    """Extension from a filename, lowercased"""
    if not filename or '.' not in filename:
        return None
    return filename.rsplit('.', 1)[1].lower()


def allowed_image(filename):
    return get_file_extension(filename) in ALLOWED_IMAGE_EXTENSIONS


def file_size(file):
    """Size of an uploaded stream without consuming it"""
    stream = file.stream
    pos = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(pos)
    return size


def unique_filename(filename):
    """<epoch-ms>-<random>.<ext>; the original name is only used for its extension"""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:10]}.{get_file_extension(filename)}"


def format_size(size):
    """Bytes to a readable string (KB, MB)"""
    power = 2**10
    n = 0
    power_labels = {0: '', 1: 'K', 2: 'M', 3: 'G', 4: 'T'}
    while size > power:
        size /= power
        n += 1
    return f"{size:.1f} {power_labels[n]}B"
