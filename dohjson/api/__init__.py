# API Package
from dohjson.api.app import create_app
from dohjson.api.server import DoHServer, HandlerFunc

__all__ = ['create_app', 'DoHServer', 'HandlerFunc']
