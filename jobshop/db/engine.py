# jobshop/db/engine.py

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from jobshop.core.config import DB_URL


@lru_cache(maxsize=None)
def get_engine() -> Engine:
    # echo=True if you want to see SQL printed in the terminal
    return create_engine(DB_URL, future=True)
