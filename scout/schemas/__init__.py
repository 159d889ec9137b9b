"""
Pydantic schemas for request/response models.
"""
