import logging

logger = logging.getLogger('tpcgeo')

if not logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter('%(levelname)s:%(name)s: %(message)s'))
    logger.addHandler(_handler)
    logger.setLevel(logging.WARNING)

def set_verbosity(level):
    '''Set the level of the tpcgeo logger.  ``level`` may be a logging
    constant or its name, e.g. ``'DEBUG'``.'''
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)
