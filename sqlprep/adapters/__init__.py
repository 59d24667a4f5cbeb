from sqlprep.adapters.dbapi import DBAPIConnection
from sqlprep.adapters.sqlite import SqliteConnection

__all__ = ("DBAPIConnection", "SqliteConnection")
