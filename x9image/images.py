'''
Identification of the extracted images.

Checks are usually scanned as bitonal TIFF (front) and grayscale JPEG, but
the carrier file doesn't care: we ask Pillow what the bytes are. Note that in
the fixed layout each image data record carries only a 246 bytes fragment,
that Pillow is not going to recognize.
'''
import io
import logging

from PIL import Image, UnidentifiedImageError


logger = logging.getLogger(__name__)


def describe(data):
    '''Returns something like "TIFF 1728x816 1" or None if the format is unknown.'''
    try:
        with Image.open(io.BytesIO(data)) as image:
            return f'{image.format} {image.width}x{image.height} {image.mode}'
    except (UnidentifiedImageError, OSError) as e:
        logger.debug('cannot identify image: %s' % e)
        return None
