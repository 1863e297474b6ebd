"""
Service layer for AWS Parameter Store, the NEAR RPC session and transfers.

This module keeps secret lookups and chain access apart from the
request handling in handler.py.
"""
