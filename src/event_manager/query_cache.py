"""
Cache de consultas à API.

Guarda o resultado de cada consulta sob uma chave (tupla), refaz a consulta
com retry quando a API falha e permite invalidar grupos de chaves por prefixo
depois de uma mutação bem-sucedida.
"""
import logging
import threading
import time
from typing import Any, Callable, Dict, Hashable, Tuple

from .exceptions import ApiError

log = logging.getLogger("event_manager")

QueryKey = Tuple[Hashable, ...]


class QueryCache:
    """Cache em memória, por processo, dos resultados de consultas."""

    def __init__(self, stale_time: float = 30.0, clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Inicializa o cache.

        Args:
            stale_time: Segundos em que um resultado continua válido (0 desativa o cache)
            clock: Função de relógio monotônico
            sleep: Função usada para aguardar entre tentativas
        """
        self.stale_time = stale_time
        self._clock = clock
        self._sleep = sleep
        self._entries: Dict[QueryKey, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Any) -> "QueryCache":
        return cls(stale_time=config.query_config["stale_time"])

    def get(self, key: QueryKey) -> Tuple[bool, Any]:
        """Retorna (encontrado, valor) para a chave, descartando entradas vencidas."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False, None
            stored_at, value = entry
            if self._clock() - stored_at >= self.stale_time:
                del self._entries[key]
                return False, None
            return True, value

    def set(self, key: QueryKey, value: Any) -> None:
        """Guarda o valor e descarta as entradas vencidas de outras chaves."""
        if self.stale_time <= 0:
            return
        with self._lock:
            now = self._clock()
            expired = [k for k, (stored_at, _) in self._entries.items() if now - stored_at >= self.stale_time]
            for expired_key in expired:
                del self._entries[expired_key]
            self._entries[key] = (now, value)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def fetch(self, key: QueryKey, fn: Callable[[], Any], retry: int = 0, retry_delay: float = 1.0) -> Any:
        """
        Retorna o valor em cache ou executa a consulta.

        Args:
            key: Chave da consulta
            fn: Função que consulta a API
            retry: Número de novas tentativas após a primeira falha
            retry_delay: Segundos entre as tentativas

        Returns:
            Resultado da consulta

        Raises:
            ApiError: Se todas as tentativas falharem
        """
        found, value = self.get(key)
        if found:
            log.debug(f"Cache hit: {key}")
            return value

        attempt = 0
        while True:
            try:
                value = fn()
                break
            except ApiError as e:
                # Recursos inexistentes não melhoram com nova tentativa
                if attempt >= retry or e.status_code == 404:
                    raise
                attempt += 1
                log.warning(f"Consulta {key[0]} falhou ({e}). Tentativa {attempt} de {retry} em {retry_delay}s")
                self._sleep(retry_delay)

        self.set(key, value)
        return value

    def invalidate(self, prefix: QueryKey) -> int:
        """
        Remove todas as entradas cuja chave começa com o prefixo.

        Returns:
            Quantidade de entradas removidas
        """
        size = len(prefix)
        with self._lock:
            stale = [key for key in self._entries if key[:size] == tuple(prefix)]
            for key in stale:
                del self._entries[key]
        log.debug(f"Cache invalidado para {prefix}: {len(stale)} entradas")
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
