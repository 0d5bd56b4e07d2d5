"""
Transaction store for the mock gateway
"""
import threading
from typing import Protocol, Set


class TransactionStore(Protocol):
    """Tracks mock order ids the simulator issued and the ones already paid"""
    
    def issue(self, order_id: str) -> None: ...
    
    def is_issued(self, order_id: str) -> bool: ...
    
    def consume(self, order_id: str) -> bool: ...
    
    def is_consumed(self, order_id: str) -> bool: ...


class InMemoryTransactionStore:
    """Process-lifetime store; contents are lost on restart"""
    
    def __init__(self):
        self._issued: Set[str] = set()
        self._consumed: Set[str] = set()
        self._lock = threading.Lock()
    
    def issue(self, order_id: str) -> None:
        with self._lock:
            self._issued.add(order_id)
    
    def is_issued(self, order_id: str) -> bool:
        with self._lock:
            return order_id in self._issued
    
    def consume(self, order_id: str) -> bool:
        """Mark an issued id as paid; False if it was already consumed"""
        with self._lock:
            if order_id in self._consumed:
                return False
            self._consumed.add(order_id)
            return True
    
    def is_consumed(self, order_id: str) -> bool:
        with self._lock:
            return order_id in self._consumed
