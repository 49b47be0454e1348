"""Configuration module for the room sharing backend.

This module provides centralized configuration management, including directory
paths, API server settings, storage locations and credential verification.
All configuration values can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Relative data and upload locations resolve against the working directory
ROOT_DIR = Path.cwd()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = Path(os.getenv("DATA_DIR", str(ROOT_DIR / DATA_DIR_NAME)))

# Uploaded attachments are written here and served back under UPLOAD_URL_PREFIX
UPLOAD_DIR_NAME = "uploads"
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", str(ROOT_DIR / UPLOAD_DIR_NAME)))
UPLOAD_URL_PREFIX: str = os.getenv("UPLOAD_URL_PREFIX", "/uploads").rstrip("/")

# --- Database Configuration ---

DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/roomshare.db")

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "61060"))

# CORS allowed origins (comma-separated list). "*" allows any origin.
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv("CORS_ALLOWED_ORIGINS", "*")
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Authentication Configuration ---

JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "your-secret-key-change-in-production")
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

# Token claim that carries the principal (an email-like identifier)
PRINCIPAL_CLAIM: str = os.getenv("PRINCIPAL_CLAIM", "email")

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
