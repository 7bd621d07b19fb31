"""
Configuration for symops

The active configuration is a :class:`configdict.ConfigDict`, keys are
validated on assignment::

    >>> from symops.config import config
    >>> config['adjustTime.intRounding'] = 'trunc'
    >>> config['adjustTime.intRounding'] = 'floor'
    ValueError: key adjustTime.intRounding should be one of {'round', 'trunc'}, got floor

The configuration is not persisted between sessions
"""
from __future__ import annotations
from configdict import ConfigDict

from symops.common import getLogger


_default = {
    'adjustTime.intRounding': 'round',
    'adjustTime.assumeSorted': False,
    'logLevel': 'WARNING',
}

_validator = {
    'adjustTime.intRounding::choices': {'round', 'trunc'},
    'adjustTime.assumeSorted::type': bool,
    'logLevel::choices': {'DEBUG', 'INFO', 'WARNING', 'ERROR'},
}

_docs = {
    'adjustTime.intRounding':
        'How a remapped time is converted back to an integer when events use '
        'integral ticks. "round": nearest integer, "trunc": towards zero',
    'adjustTime.assumeSorted':
        'Default for the "sorted" argument of adjustTime, used when it is not given '
        'explicitely. If True, events and breakpoints are assumed to be sorted',
    'logLevel':
        'Level of the "symops" logger',
}


def _setLogLevel(cfg: ConfigDict, key: str, val) -> None:
    getLogger('symops').setLevel(val)


config = ConfigDict('symops', _default, validator=_validator, docs=_docs,
                    persistent=False, load=False)
config.registerCallback(_setLogLevel, pattern='logLevel')
getLogger('symops').setLevel(config['logLevel'])
