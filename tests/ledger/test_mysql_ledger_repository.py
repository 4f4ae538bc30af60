from decimal import Decimal

from src.hr_payroll.hr_payroll.ledger.mysql_ledger_repository import MySQLLedgerRepository


class RecordingCursor:
    def __init__(self, row):
        self.row = row
        self.statements = []
        self.lastrowid = row["id"]

    def execute(self, sql, params=()):
        self.statements.append((" ".join(sql.split()), params))

    def fetchone(self):
        return self.row

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.commits = 0

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        pass

    def close(self):
        pass


class RecordingFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        return self.conn


def test_upsert_is_a_single_insert_on_duplicate_key_statement():
    row = {
        "id": 7,
        "head": "Salary & Wages",
        "subhead": None,
        "month": 1,
        "year": 2025,
        "amount": Decimal("22000.00"),
        "tds_percentage": Decimal("10.00"),
        "gst_percentage": Decimal("0.00"),
        "frequency": "Monthly",
        "remarks": "Auto-synced from payroll",
        "updated_at": None,
    }
    cursor = RecordingCursor(row)
    conn = RecordingConnection(cursor)
    repo = MySQLLedgerRepository(RecordingFactory(conn))

    entry = repo.upsert_amount(head="Salary & Wages", month=1, year=2025, amount=Decimal("22000.00"))

    writes = [sql for sql, _ in cursor.statements if not sql.startswith("SELECT")]
    assert len(writes) == 1
    assert "ON DUPLICATE KEY UPDATE amount=VALUES(amount)" in writes[0]
    assert not any("FOR UPDATE" in sql for sql, _ in cursor.statements)
    assert cursor.statements[-1][1] == (7,)
    assert conn.commits == 1
    assert entry.entry_id == 7
    assert entry.amount == Decimal("22000.00")
