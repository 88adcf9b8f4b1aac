import time

from cachetools import TTLCache

from app.config.settings import AI_CACHE_MAX_ENTRIES, AI_CACHE_TTL_SECONDS


class AnalysisCache:
    """Resultados de IA del dashboard por rango de fechas.

    Cada entrada guarda el numero de inspecciones con que se calculo; si el
    numero actual es distinto la entrada se descarta. Las entradas expiran a
    los `ttl` segundos.
    """

    def __init__(self, ttl=AI_CACHE_TTL_SECONDS, maxsize=AI_CACHE_MAX_ENTRIES, timer=time.monotonic):
        self._cache = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)

    def get(self, date_from, date_to, record_count):
        key = (date_from, date_to)
        entry = self._cache.get(key)
        if entry is None:
            return None
        cached_count, value = entry
        if cached_count != record_count:
            self._cache.pop(key, None)
            return None
        return value

    def set(self, date_from, date_to, record_count, value):
        self._cache[(date_from, date_to)] = (record_count, value)

    def clear(self):
        self._cache.clear()

    def __len__(self):
        return len(self._cache)
