"""
Authentication microservice for the document-management platform.

This module provides:
- Login against the user-directory service
- JWT token issuance and validation
"""
