"""Wardrobe document store abstractions and SQLite implementation."""
from __future__ import annotations

import json
import sqlite3
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from models.records import Garment, Outfit, Usage, User


class WardrobeStore:
    """Persistence interface for users, garments, outfits and usages."""

    def create_user(self, user: User) -> User:
        raise NotImplementedError

    def get_user(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def update_preferences(self, user_id: str, preferences: Dict[str, List[str]]) -> Optional[User]:
        raise NotImplementedError

    def create_garment(self, garment: Garment) -> Garment:
        raise NotImplementedError

    def list_garments(self, user_id: str) -> List[Garment]:
        raise NotImplementedError

    def create_outfit(self, outfit: Outfit) -> Outfit:
        raise NotImplementedError

    def list_outfits(self, user_id: str) -> List[Outfit]:
        raise NotImplementedError

    def delete_outfit(self, user_id: str, outfit_id: str) -> bool:
        raise NotImplementedError

    def record_usage(self, usage: Usage) -> Usage:
        raise NotImplementedError

    def list_usages(self, user_id: str) -> List[Usage]:
        raise NotImplementedError


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed store standing in for the document database."""

    def __init__(self, database_path: str | Path = "data/closet.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    user_id TEXT PRIMARY KEY,
                    name TEXT,
                    email TEXT,
                    styles TEXT,
                    favorite_colors TEXT
                );
                CREATE TABLE IF NOT EXISTS garments (
                    user_id TEXT NOT NULL,
                    garment_id TEXT NOT NULL,
                    name TEXT,
                    category TEXT NOT NULL,
                    color TEXT NOT NULL,
                    season TEXT,
                    image_url TEXT,
                    cost REAL,
                    wear_count INTEGER NOT NULL DEFAULT 0,
                    PRIMARY KEY (user_id, garment_id)
                );
                CREATE TABLE IF NOT EXISTS outfits (
                    user_id TEXT NOT NULL,
                    outfit_id TEXT NOT NULL,
                    day TEXT NOT NULL,
                    garment_ids TEXT,
                    preview_image_ref TEXT,
                    occasion TEXT,
                    position INTEGER NOT NULL,
                    PRIMARY KEY (user_id, outfit_id)
                );
                CREATE TABLE IF NOT EXISTS usages (
                    user_id TEXT NOT NULL,
                    usage_id TEXT NOT NULL,
                    garment_id TEXT NOT NULL,
                    outfit_id TEXT,
                    worn_date TEXT NOT NULL,
                    PRIMARY KEY (user_id, usage_id)
                );
                CREATE INDEX IF NOT EXISTS usages_by_garment ON usages (user_id, garment_id);
                """
            )

    @staticmethod
    def _serialise_list(values: Optional[tuple | list]) -> str:
        return json.dumps(list(values or []))

    @staticmethod
    def _deserialise_list(raw: str) -> List[str]:
        return json.loads(raw) if raw else []

    # Users

    def create_user(self, user: User) -> User:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO users (user_id, name, email, styles, favorite_colors)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    user.id,
                    user.name,
                    user.email,
                    self._serialise_list(user.styles),
                    self._serialise_list(user.favorite_colors),
                ),
            )
        return user

    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            id=row["user_id"],
            name=row["name"],
            email=row["email"],
            styles=tuple(self._deserialise_list(row["styles"])),
            favorite_colors=tuple(self._deserialise_list(row["favorite_colors"])),
        )

    def get_user(self, user_id: str) -> Optional[User]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE user_id = ?", (user_id,)).fetchone()
            return self._row_to_user(row) if row else None

    def update_preferences(self, user_id: str, preferences: Dict[str, List[str]]) -> Optional[User]:
        current = self.get_user(user_id)
        if not current:
            return None

        updated = User(
            id=current.id,
            name=current.name,
            email=current.email,
            styles=tuple(preferences.get("styles", current.styles)),
            favorite_colors=tuple(preferences.get("favorite_colors", current.favorite_colors)),
        )
        return self.create_user(updated)

    # Garments

    def create_garment(self, garment: Garment) -> Garment:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO garments (
                    user_id, garment_id, name, category, color, season, image_url, cost, wear_count
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    garment.user_id,
                    garment.id,
                    garment.name,
                    garment.category,
                    garment.color,
                    self._serialise_list(garment.season),
                    garment.image_url,
                    garment.cost,
                    garment.wear_count,
                ),
            )
        return garment

    def _row_to_garment(self, row: sqlite3.Row) -> Garment:
        return Garment(
            id=row["garment_id"],
            user_id=row["user_id"],
            category=row["category"],
            color=row["color"],
            name=row["name"],
            season=tuple(self._deserialise_list(row["season"])),
            image_url=row["image_url"],
            cost=row["cost"],
            wear_count=row["wear_count"],
        )

    def get_garment(self, user_id: str, garment_id: str) -> Optional[Garment]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM garments WHERE user_id = ? AND garment_id = ?",
                (user_id, garment_id),
            ).fetchone()
            return self._row_to_garment(row) if row else None

    def list_garments(self, user_id: str) -> List[Garment]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM garments WHERE user_id = ? ORDER BY garment_id",
                (user_id,),
            )
            return [self._row_to_garment(row) for row in cursor.fetchall()]

    # Outfits

    def create_outfit(self, outfit: Outfit) -> Outfit:
        """Insert or replace an outfit; a replaced outfit keeps its original position."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT position FROM outfits WHERE user_id = ? AND outfit_id = ?",
                (outfit.user_id, outfit.id),
            ).fetchone()
            if row:
                position = row["position"]
            else:
                position = conn.execute(
                    "SELECT COALESCE(MAX(position), 0) + 1 FROM outfits WHERE user_id = ?",
                    (outfit.user_id,),
                ).fetchone()[0]
            conn.execute(
                """
                INSERT OR REPLACE INTO outfits (
                    user_id, outfit_id, day, garment_ids, preview_image_ref, occasion, position
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    outfit.user_id,
                    outfit.id,
                    outfit.date.isoformat(),
                    self._serialise_list(outfit.garment_ids),
                    outfit.preview_image_ref,
                    outfit.occasion,
                    position,
                ),
            )
        return outfit

    def _row_to_outfit(self, row: sqlite3.Row) -> Outfit:
        return Outfit(
            id=row["outfit_id"],
            user_id=row["user_id"],
            date=date.fromisoformat(row["day"]),
            garment_ids=tuple(self._deserialise_list(row["garment_ids"])),
            preview_image_ref=row["preview_image_ref"],
            occasion=row["occasion"],
        )

    def list_outfits(self, user_id: str) -> List[Outfit]:
        """Outfits in insertion order, which decides duplicate-day and tie-break outcomes."""

        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM outfits WHERE user_id = ? ORDER BY position",
                (user_id,),
            )
            return [self._row_to_outfit(row) for row in cursor.fetchall()]

    def delete_outfit(self, user_id: str, outfit_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM outfits WHERE user_id = ? AND outfit_id = ?",
                (user_id, outfit_id),
            )
            return cursor.rowcount > 0

    # Usages

    def record_usage(self, usage: Usage) -> Usage:
        """Store a usage and bump the garment's wear count in one transaction.

        Raises :class:`KeyError` when the garment does not belong to the user
        and :class:`ValueError` when the usage id already exists.
        """

        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE garments SET wear_count = wear_count + 1 WHERE user_id = ? AND garment_id = ?",
                (usage.user_id, usage.garment_id),
            )
            if cursor.rowcount == 0:
                raise KeyError(usage.garment_id)
            try:
                conn.execute(
                    """
                    INSERT INTO usages (user_id, usage_id, garment_id, outfit_id, worn_date)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        usage.user_id,
                        usage.id,
                        usage.garment_id,
                        usage.outfit_id,
                        usage.worn_date.isoformat(),
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise ValueError(f"usage {usage.id} already recorded") from exc
        return usage

    def list_usages(self, user_id: str) -> List[Usage]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM usages WHERE user_id = ? ORDER BY worn_date, usage_id",
                (user_id,),
            )
            return [
                Usage(
                    id=row["usage_id"],
                    user_id=row["user_id"],
                    garment_id=row["garment_id"],
                    outfit_id=row["outfit_id"],
                    worn_date=date.fromisoformat(row["worn_date"]),
                )
                for row in cursor.fetchall()
            ]


__all__ = ["WardrobeStore", "SQLiteWardrobeStore"]
