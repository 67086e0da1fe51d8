import os

# Keep test runs off the on-disk SQLite file.
os.environ.setdefault("STORE_BACKEND", "memory")
