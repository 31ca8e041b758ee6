# Data Models Package
from .question import Question, fqdn, is_fqdn
from .record import Record
from .answer import Answer
from .fields import parse_bool
from . import rrtypes

__all__ = ['Question', 'fqdn', 'is_fqdn', 'Record', 'Answer', 'parse_bool', 'rrtypes']
