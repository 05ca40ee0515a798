#!/usr/bin/env python3
'''
Extract the check images from a cash letter file into the working directory
(or X9_OUTPUT_DIR), see x9image.extract for the other settings.

 $ DEBUG=1 x9extract.py checks.dat
'''
import logging
import os
import sys

from x9image.extract import main


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


if __name__ == '__main__':
    sys.exit(main(sys.argv))
