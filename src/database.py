"""SQLite storage for persons and parent links, read back by the fan chart."""

from pathlib import Path
import sqlite3

from models import ParentLink, Person, PersonId
from parsing import coerce_id, sex_from_raw


def create_database(db_path: Path | str) -> sqlite3.Connection:
    """Create SQLite database with person, parent_link and setting tables."""
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    # Ids are stored as text so synthetic ids survive next to numeric ones
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS person (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            sex INTEGER NOT NULL DEFAULT 2,
            birth TEXT,
            death TEXT,
            birth_place TEXT,
            death_place TEXT,
            occupation TEXT,
            hidden INTEGER NOT NULL DEFAULT 0
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS parent_link (
            child_id TEXT PRIMARY KEY,
            father_id TEXT,
            mother_id TEXT,
            FOREIGN KEY (child_id) REFERENCES person(id)
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS setting (
            key TEXT PRIMARY KEY,
            value TEXT
        )
    """)

    conn.commit()
    return conn


def _text_id(value: PersonId | None) -> str | None:
    return None if value is None else str(value)


def store_data(
    conn: sqlite3.Connection,
    persons: list[Person],
    links: list[ParentLink],
    root_id: PersonId | None = None,
):
    """Insert persons, parent links and optionally the default root."""
    cursor = conn.cursor()

    cursor.executemany(
        """
        INSERT OR REPLACE INTO person
        (id, name, sex, birth, death, birth_place, death_place, occupation, hidden)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (
                _text_id(p.id),
                p.name,
                int(p.sex),
                p.birth,
                p.death,
                p.birth_place,
                p.death_place,
                p.occupation,
                int(p.hidden),
            )
            for p in persons
        ],
    )

    cursor.executemany(
        """
        INSERT OR REPLACE INTO parent_link (child_id, father_id, mother_id)
        VALUES (?, ?, ?)
        """,
        [(_text_id(l.child), _text_id(l.father), _text_id(l.mother)) for l in links],
    )

    if root_id is not None:
        cursor.execute(
            "INSERT OR REPLACE INTO setting (key, value) VALUES ('root_person_id', ?)",
            (_text_id(root_id),),
        )

    conn.commit()


class SqliteFamilyStore:
    """Data store handing persons, parent links and the root id to a chart."""

    def __init__(self, conn: sqlite3.Connection, root_id: PersonId | None = None):
        self.conn = conn
        self.root_id = root_id

    def list_persons(self) -> list[Person]:
        cursor = self.conn.cursor()
        cursor.execute(
            "SELECT id, name, sex, birth, death, birth_place, death_place, occupation, hidden "
            "FROM person"
        )
        return [
            Person(
                id=coerce_id(row[0]),
                name=row[1],
                sex=sex_from_raw(row[2]),
                birth=row[3],
                death=row[4],
                birth_place=row[5],
                death_place=row[6],
                occupation=row[7],
                hidden=bool(row[8]),
            )
            for row in cursor.fetchall()
        ]

    def list_parent_links(self) -> list[ParentLink]:
        cursor = self.conn.cursor()
        cursor.execute("SELECT child_id, father_id, mother_id FROM parent_link")
        return [
            ParentLink(child=coerce_id(row[0]), father=coerce_id(row[1]), mother=coerce_id(row[2]))
            for row in cursor.fetchall()
        ]

    def get_root_id(self) -> PersonId | None:
        """Explicit root first, then the stored default, then the first visible person."""
        if self.root_id is not None:
            return self.root_id

        cursor = self.conn.cursor()
        cursor.execute("SELECT value FROM setting WHERE key = 'root_person_id'")
        row = cursor.fetchone()
        if row is not None and row[0]:
            return coerce_id(row[0])

        cursor.execute("SELECT id FROM person WHERE hidden = 0 ORDER BY rowid LIMIT 1")
        row = cursor.fetchone()
        return coerce_id(row[0]) if row else None
