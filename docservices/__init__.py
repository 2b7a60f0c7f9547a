"""
User-directory and authentication microservices for the document-management platform.
"""
