"""In-memory restaurant and table stores"""

from collections import defaultdict
from typing import Dict, List, Optional
from uuid import UUID

from tablebook.models import Restaurant, Table, TableStatus
from tablebook.repositories.base import BaseRestaurantRepository, BaseTableRepository


class InMemoryRestaurantRepository(BaseRestaurantRepository):

    def __init__(self):
        self._by_id: Dict[UUID, Restaurant] = {}

    def add(self, restaurant: Restaurant) -> Restaurant:
        self._by_id[restaurant.id] = restaurant
        return restaurant

    def get(self, restaurant_id: UUID) -> Optional[Restaurant]:
        return self._by_id.get(restaurant_id)

    def list(self) -> List[Restaurant]:
        return sorted(self._by_id.values(), key=lambda r: r.created_at)


class InMemoryTableRepository(BaseTableRepository):

    def __init__(self):
        self._by_id: Dict[UUID, Table] = {}
        self._by_restaurant: Dict[UUID, List[UUID]] = defaultdict(list)

    def add(self, table: Table) -> Table:
        if table.id not in self._by_id:
            self._by_restaurant[table.restaurant_id].append(table.id)
        self._by_id[table.id] = table
        return table

    def get(self, table_id: UUID) -> Optional[Table]:
        return self._by_id.get(table_id)

    def tables_of(self, restaurant_id: UUID) -> List[Table]:
        tables = [self._by_id[tid] for tid in self._by_restaurant.get(restaurant_id, [])]
        return sorted(tables, key=lambda t: t.number)

    def set_status(self, table_id: UUID, status: TableStatus) -> Optional[Table]:
        table = self._by_id.get(table_id)
        if table is not None:
            table.status = status
        return table
