"""
Finance Tracker API
-------------------

A small personal-finance backend that records income and expense
transactions in a relational store and reports aggregate totals over HTTP.
"""

__version__ = '0.1.0'
__license__ = 'MIT'

from .database import (
    connect,
    init_db,
    get_session_factory
)

from .repository import TransactionRepository

from .api import create_app
