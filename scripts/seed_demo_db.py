#!/usr/bin/env python3
"""
Seed a local SQLite inventory database for development.
Usage (from the repository root):
    python scripts/seed_demo_db.py
Creates: data/inventory.db (the default DB_FILE_PATH when DB_TYPE=sqlite,
run the API from the repository root)
"""
import sqlite3
import random
from datetime import datetime, timedelta
from pathlib import Path

DB_PATH = Path(__file__).parent.parent / "data" / "inventory.db"

DDL = [
    """
    CREATE TABLE IF NOT EXISTS Buildings (
        BuildingId  INTEGER PRIMARY KEY AUTOINCREMENT,
        Name        TEXT    NOT NULL,
        Address     TEXT
    )""",
    """
    CREATE TABLE IF NOT EXISTS Units (
        UnitId      INTEGER PRIMARY KEY AUTOINCREMENT,
        BuildingId  INTEGER REFERENCES Buildings(BuildingId),
        UnitNumber  TEXT    NOT NULL
    )""",
    """
    CREATE TABLE IF NOT EXISTS Residents (
        ResidentId  INTEGER PRIMARY KEY AUTOINCREMENT,
        UnitId      INTEGER REFERENCES Units(UnitId),
        FirstName   TEXT    NOT NULL,
        LastName    TEXT    NOT NULL,
        MoveInDate  TIMESTAMP
    )""",
    """
    CREATE TABLE IF NOT EXISTS Categories (
        CategoryId  INTEGER PRIMARY KEY AUTOINCREMENT,
        Name        TEXT UNIQUE NOT NULL
    )""",
    """
    CREATE TABLE IF NOT EXISTS Items (
        ItemId      INTEGER PRIMARY KEY AUTOINCREMENT,
        CategoryId  INTEGER REFERENCES Categories(CategoryId),
        Name        TEXT    NOT NULL,
        QuantityOnHand INTEGER DEFAULT 0,
        UnitCost    REAL
    )""",
    """
    CREATE TABLE IF NOT EXISTS Users (
        UserId      INTEGER PRIMARY KEY AUTOINCREMENT,
        Login       TEXT UNIQUE NOT NULL,
        DisplayName TEXT
    )""",
    """
    CREATE TABLE IF NOT EXISTS TransactionTypes (
        TransactionTypeId INTEGER PRIMARY KEY AUTOINCREMENT,
        Name        TEXT UNIQUE NOT NULL
    )""",
    """
    CREATE TABLE IF NOT EXISTS Transactions (
        TransactionId     INTEGER PRIMARY KEY AUTOINCREMENT,
        TransactionTypeId INTEGER REFERENCES TransactionTypes(TransactionTypeId),
        ResidentId  INTEGER REFERENCES Residents(ResidentId),
        UserId      INTEGER REFERENCES Users(UserId),
        OccurredAt  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )""",
    """
    CREATE TABLE IF NOT EXISTS TransactionItems (
        TransactionItemId INTEGER PRIMARY KEY AUTOINCREMENT,
        TransactionId INTEGER REFERENCES Transactions(TransactionId),
        ItemId      INTEGER REFERENCES Items(ItemId),
        Quantity    INTEGER NOT NULL
    )""",
    # Not allow-listed: never described to the model
    """
    CREATE TABLE IF NOT EXISTS AuditLog (
        AuditLogId  INTEGER PRIMARY KEY AUTOINCREMENT,
        Detail      TEXT
    )""",
]

CATEGORIES = ['Cleaning', 'Kitchen', 'Bedding', 'Hygiene', 'Furniture']
TRANSACTION_TYPES = ['Issue', 'Return', 'Restock']


def seed():
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DB_PATH)
    cur  = conn.cursor()

    for stmt in DDL:
        cur.execute(stmt)

    for name in CATEGORIES:
        cur.execute("INSERT OR IGNORE INTO Categories(Name) VALUES (?)", (name,))
    for name in TRANSACTION_TYPES:
        cur.execute("INSERT OR IGNORE INTO TransactionTypes(Name) VALUES (?)", (name,))

    for b in range(1, 4):
        cur.execute("INSERT INTO Buildings(Name, Address) VALUES (?,?)",
                    (f"Building {b}", f"{random.randint(1, 999)} Main St"))
        building_id = cur.lastrowid
        for u in range(1, 11):
            cur.execute("INSERT INTO Units(BuildingId, UnitNumber) VALUES (?,?)",
                        (building_id, f"{b}{u:02d}"))

    for r in range(1, 41):
        cur.execute("INSERT INTO Residents(UnitId, FirstName, LastName, MoveInDate) VALUES (?,?,?,?)",
                    (random.randint(1, 30), f"Resident{r}", "Demo",
                     datetime.now() - timedelta(days=random.randint(10, 730))))

    for i in range(1, 61):
        cur.execute("INSERT INTO Items(CategoryId, Name, QuantityOnHand, UnitCost) VALUES (?,?,?,?)",
                    (random.randint(1, len(CATEGORIES)), f"Item {i}",
                     random.randint(0, 200), round(random.uniform(1, 80), 2)))

    for login in ("alice", "bob", "carol"):
        cur.execute("INSERT OR IGNORE INTO Users(Login, DisplayName) VALUES (?,?)", (login, login.title()))

    for _ in range(300):
        cur.execute("INSERT INTO Transactions(TransactionTypeId, ResidentId, UserId, OccurredAt) VALUES (?,?,?,?)",
                    (random.randint(1, len(TRANSACTION_TYPES)), random.randint(1, 40), random.randint(1, 3),
                     datetime.now() - timedelta(minutes=random.randint(0, 525600))))
        tx_id = cur.lastrowid
        for _ in range(random.randint(1, 4)):
            cur.execute("INSERT INTO TransactionItems(TransactionId, ItemId, Quantity) VALUES (?,?,?)",
                        (tx_id, random.randint(1, 60), random.randint(1, 5)))

    conn.commit()
    conn.close()
    print(f"Demo database seeded: {DB_PATH}")


if __name__ == "__main__":
    seed()
