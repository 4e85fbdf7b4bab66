from datetime import datetime
from glob import glob
import logging
import os

from braceexpand import braceexpand

from .constants import Namespace


class Log:
    """
    formats progress messages (optional time stamp, indentation) and passes them to the builtin logging
    """
    def __init__(self, indent_str='  ', indent_level=0, level=logging.INFO):
        self.indent_str = indent_str
        self.indent_level = indent_level
        self.level = level

    def __call__(self, *pos, time_stamp=False, level=None, indent_level=0, **kwargs):
        if level is None:
            level = self.level
        stamp = datetime.now().strftime('[%Y-%m-%d %H:%M:%S]') if time_stamp else ' ' * 21
        indent_prefix = self.indent_str * (self.indent_level + indent_level)
        message = '{} {}{}'.format(stamp, indent_prefix, ' '.join([str(p) for p in pos]))
        logging.log(level, message, **kwargs)

    def warning(self, *pos, **kwargs):
        kwargs['level'] = logging.WARNING
        self(*pos, **kwargs)


LOG = Log()


class WeakNamespace(Namespace):
    """
    namespace where every member can be overridden by its environment variable equivalent
    """

    def is_env_overwritable(self, attr):
        return True


def bash_expands(*expressions):
    """
    expand a file glob expression, allowing bash-style brackets.

    Returns:
        list: a list of files

    Raises:
        FileNotFoundError: an expression does not match any files

    Example:
        >>> bash_expands('./sql/patch_{39,40}_*.sql')
        [...]
    """
    result = []
    for expression in expressions:
        eresult = []
        for name in braceexpand(expression):
            for fname in glob(name):
                eresult.append(fname)
        if not eresult:
            raise FileNotFoundError('The expression does not match any files', expression)
        result.extend(eresult)
    return [os.path.abspath(f) for f in result]
