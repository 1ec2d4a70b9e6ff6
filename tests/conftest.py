import sys
from pathlib import Path
import pytest

# Omogući import projekta kad se testovi pokreću iz bilo kog radnog dir-a
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from easyqb.config.env import EnvLoader
from easyqb.db.base_driver import BaseDBDriver, PreparedStatement, shape_row
from easyqb.db.query import FetchShape
from easyqb.db.query_builder import QueryBuilder
from easyqb.handlers.log_handler import LogHandler
from easyqb.managers.error_manager import ErrorManager
from easyqb.managers.log_manager import LogManager


@pytest.fixture(scope="session", autouse=True)
def log_file(tmp_path_factory):
    """Svi logovi iz testova idu u privremeni fajl, ne u storage/logs."""
    EnvLoader.load()
    path = tmp_path_factory.mktemp("logs") / "test.log"
    previous = LogHandler.log_file_path
    LogHandler.set_path(str(path))
    ErrorManager.initialize(dev_mode=False)
    yield path
    LogHandler.set_path(previous)


@pytest.fixture(autouse=True)
def clean_managers():
    LogManager.delete()
    ErrorManager.delete()
    yield


class RecordingDriver(BaseDBDriver):
    """Lažni drajver: pamti (sql, params) svakog izvršavanja i vraća zadate redove."""
    name = "recording"

    def __init__(self, rows=None, columns=None, affected=1, fail=None):
        self.rows = list(rows or [])
        self.columns = list(columns or [])
        self.affected = affected
        self.fail = fail
        self.calls = []
        self.closed = False

    def prepare(self, sql):
        if self.fail == "prepare":
            raise RuntimeError("prepare failed")
        return PreparedStatement(sql=sql)

    def execute(self, statement, parameters=None):
        self.calls.append((statement.sql, dict(parameters or {})))
        if self.fail == "execute":
            raise RuntimeError("execute failed")
        if statement.sql.startswith("SELECT"):
            statement.columns = self.columns
            statement.rows = list(self.rows)
            statement.rowcount = len(self.rows)
        else:
            statement.rowcount = self.affected
        return statement.rowcount

    def fetch_one(self, statement, shape=FetchShape.ASSOC):
        if not statement.rows:
            return None
        return shape_row(statement.rows.pop(0), statement.columns, shape)

    def fetch_all(self, statement, shape=FetchShape.ASSOC):
        rows, statement.rows = statement.rows, []
        return [shape_row(r, statement.columns, shape) for r in rows]

    def row_count(self, statement):
        return statement.rowcount

    def close(self):
        self.closed = True


@pytest.fixture
def fake_driver():
    return RecordingDriver(
        rows=[(1, "Ana", 30), (2, "Boris", 25)],
        columns=["id", "name", "age"],
    )


@pytest.fixture
def fake_qb(fake_driver):
    return QueryBuilder({"prefix": "tst_"}, driver=fake_driver)


SEED = [
    {"id": 1, "name": "Ana", "age": 30},
    {"id": 2, "name": "Boris", "age": 25},
    {"id": 3, "name": "Ceca", "age": 27},
]


@pytest.fixture
def sqlite_qb(tmp_path):
    """Builder nad svežim SQLite fajlom sa tabelom tst_users i tri reda."""
    qb = QueryBuilder({
        "driver": "sqlite",
        "db_name": str(tmp_path / "app_test.db"),
        "charset": "utf8",
        "prefix": "tst_",
        "options": {"journal_mode": "delete"},
    })
    qb.driver.conn.execute(
        "CREATE TABLE tst_users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, age INTEGER)"
    )
    for row in SEED:
        qb.insert("users").set(row)
    yield qb
    qb.close()
