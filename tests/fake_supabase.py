"""
Client Supabase en mémoire pour les tests

Couvre le sous-ensemble du query builder PostgREST utilisé par app.crud:
select (avec count), insert, update, delete, eq, neq, in_, ilike, or_,
order, range, limit, ainsi que rpc pour les deux fonctions SQL d'intérêt.
"""
import copy
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

TIMESTAMPED = {
    "buyers": ("created_at",),
    "sellers": ("created_at",),
    "admins": ("created_at",),
    "properties": ("created_at", "updated_at"),
    "appointments": ("created_at",),
}


@dataclass
class FakeResponse:
    data: Any
    count: Optional[int] = None


def _like(pattern: str, value: Any) -> bool:
    if value is None:
        return False
    regex = "^" + ".*".join(re.escape(part) for part in pattern.split("%")) + "$"
    return re.match(regex, str(value), re.IGNORECASE | re.DOTALL) is not None


def _same(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return left is right
    return str(left) == str(right)


class FakeQuery:
    def __init__(self, store: "FakeSupabase", table: str):
        self.store = store
        self.table = table
        self.operation = "select"
        self.payload = None
        self.count_mode = None
        self.filters: List[Callable[[Dict[str, Any]], bool]] = []
        self.ordering = []
        self.bounds = None
        self.max_rows = None

    # ----- opérations -----

    def select(self, columns: str = "*", count: Optional[str] = None):
        self.operation = "select"
        self.count_mode = count
        return self

    def insert(self, data):
        self.operation = "insert"
        self.payload = data
        return self

    def update(self, data):
        self.operation = "update"
        self.payload = data
        return self

    def delete(self):
        self.operation = "delete"
        return self

    # ----- filtres -----

    def eq(self, column: str, value: Any):
        self.filters.append(lambda row: _same(row.get(column), value))
        return self

    def neq(self, column: str, value: Any):
        self.filters.append(lambda row: not _same(row.get(column), value))
        return self

    def in_(self, column: str, values):
        values = [str(v) for v in values]
        self.filters.append(lambda row: row.get(column) is not None and str(row.get(column)) in values)
        return self

    def ilike(self, column: str, pattern: str):
        self.filters.append(lambda row: _like(pattern, row.get(column)))
        return self

    def or_(self, expression: str):
        clauses = []
        for clause in expression.split(","):
            column, operator, operand = clause.split(".", 2)
            if operator != "ilike":
                raise NotImplementedError(f"or_: opérateur {operator} non supporté")
            clauses.append((column, operand))
        self.filters.append(lambda row: any(_like(p, row.get(c)) for c, p in clauses))
        return self

    def order(self, column: str, desc: bool = False):
        self.ordering.append((column, desc))
        return self

    def range(self, start: int, end: int):
        self.bounds = (start, end)
        return self

    def limit(self, size: int):
        self.max_rows = size
        return self

    # ----- exécution -----

    def _matching(self) -> List[Dict[str, Any]]:
        rows = self.store.tables.setdefault(self.table, [])
        return [row for row in rows if all(check(row) for check in self.filters)]

    def execute(self) -> FakeResponse:
        if self.store.fail_on == self.table:
            raise RuntimeError(f"store indisponible: {self.table}")

        if self.operation == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            created = [self.store.add(self.table, item) for item in items]
            return FakeResponse(data=copy.deepcopy(created))

        if self.operation == "update":
            rows = self._matching()
            for row in rows:
                row.update(copy.deepcopy(self.payload))
            return FakeResponse(data=copy.deepcopy(rows))

        if self.operation == "delete":
            rows = self._matching()
            ids = {id(row) for row in rows}
            self.store.tables[self.table] = [
                row for row in self.store.tables[self.table] if id(row) not in ids
            ]
            return FakeResponse(data=copy.deepcopy(rows))

        rows = self._matching()
        total = len(rows) if self.count_mode else None

        for column, desc in reversed(self.ordering):
            present = [r for r in rows if r.get(column) is not None]
            absent = [r for r in rows if r.get(column) is None]
            present.sort(key=lambda r: r[column], reverse=desc)
            # Postgres: NULLS LAST en ascendant, NULLS FIRST en descendant
            rows = absent + present if desc else present + absent

        if self.bounds is not None:
            start, end = self.bounds
            rows = rows[start:end + 1]
        if self.max_rows is not None:
            rows = rows[:self.max_rows]

        return FakeResponse(data=copy.deepcopy(rows), count=total)


class FakeRpc:
    def __init__(self, store: "FakeSupabase", name: str, params: Dict[str, Any]):
        self.store = store
        self.name = name
        self.params = params

    def execute(self) -> FakeResponse:
        property_id = str(self.params["p_property_id"])
        buyer_id = str(self.params["p_buyer_id"])
        for row in self.store.tables.get("properties", []):
            if str(row["id"]) != property_id:
                continue
            if self.name == "add_property_interest":
                if buyer_id not in row["interested"]:
                    row["interested"].append(buyer_id)
            elif self.name == "remove_property_interest":
                row["interested"] = [b for b in row["interested"] if b != buyer_id]
            else:
                raise NotImplementedError(f"rpc {self.name} inconnue")
        return FakeResponse(data=None)


class FakeSupabase:
    """Remplaçant de supabase.Client; une liste de dict par table"""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {name: [] for name in TIMESTAMPED}
        self.fail_on: Optional[str] = None
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> str:
        # Horodatages strictement croissants pour des tris déterministes
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def add(self, table: str, item: Dict[str, Any]) -> Dict[str, Any]:
        row = copy.deepcopy(item)
        row.setdefault("id", str(uuid.uuid4()))
        stamp = self.now()
        for column in TIMESTAMPED.get(table, ()):
            row.setdefault(column, stamp)
        if table == "properties":
            row.setdefault("interested", [])
        self.tables.setdefault(table, []).append(row)
        return row

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: Dict[str, Any]) -> FakeRpc:
        return FakeRpc(self, name, params)
