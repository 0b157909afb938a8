#!/usr/bin/env python3
'''
Hide messages inside the chunks of a PNG file

 $ pngchunks.py encode image.png ruSt 'hello world'
 $ pngchunks.py decode image.png ruSt
 hello world

Set the DEBUG environment variable to see what happens under the hood.
'''
import logging
import os
import sys

from pngme.commands import main


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


if __name__ == '__main__':
    sys.exit(main(sys.argv))
