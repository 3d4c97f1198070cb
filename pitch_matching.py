#!/usr/bin/env python3
"""Diplacusis hearing test.

A reference tone is played to the left ear and a comparison tone to the
right ear. Move the comparison tone with w/d until both tones have the same
pitch, then lock the pair with #. The locked pairs are appended to
results_YYYY-MM-DD.csv in the results folder.

**WARNING**: Turn the volume down before you start. This is no
replacement for a diagnosis by an audiologist!

"""

import logging
from diplacusis import controller
from diplacusis.matching_method import PitchMatching


def main(args=None):
    cfg = controller.config(args)

    logging.basicConfig(level=logging.DEBUG, format='%(levelname)s:%(message)s',
                        handlers=[logging.FileHandler("logfile.log", 'w'),
                                  logging.StreamHandler()])
    if not cfg.logging:
        logging.disable(logging.CRITICAL)

    with PitchMatching(cfg) as matching:
        matching.run()

    print("Finished!")


if __name__ == '__main__':
    main()
