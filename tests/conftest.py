"""Test environment: in-memory SQLite and a throwaway image directory, set before the app is imported."""

import os
import tempfile

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-0123456789abcdef0123456789abcdef"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["COOKIE_SECURE"] = "true"
os.environ["SITE_URL"] = "https://www.example.org"
os.environ["IMAGE_STORAGE_DIR"] = tempfile.mkdtemp(prefix="cms-images-")
