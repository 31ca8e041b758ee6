"""DNS-over-HTTPS using the JSON format."""
from dohjson.models import Answer, Question, Record, fqdn, is_fqdn
from dohjson.models.rrtypes import return_code_to_name, type_from_name, type_to_name
from dohjson.services.doh_client import DoHClient, QueryResult, execute
from dohjson.api.server import DoHServer

__all__ = [
    'Answer',
    'Question',
    'Record',
    'fqdn',
    'is_fqdn',
    'return_code_to_name',
    'type_from_name',
    'type_to_name',
    'DoHClient',
    'QueryResult',
    'execute',
    'DoHServer',
]
