"""Products domain used across the tests: entity, row mapper and SQL."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sql_template.database import ResultSet

CREATED = datetime(2022, 2, 24, 4, 0, 0)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS products (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT,
    price REAL NOT NULL,
    creation_date TIMESTAMP NOT NULL
);
"""

SEED_SQL = """
INSERT INTO products (name, description, price, creation_date) VALUES
    ('Samsung Galaxy M52', '6.7 inches, Qualcomm SM7325 Snapdragon 778G 5G', 13499.0, '2022-02-24 04:00:00'),
    ('Xiaomi Redmi Note 9 Pro', '6.67 inches, Qualcomm SM7125 Snapdragon 720G Octa-core', 11699.0, '2022-02-24 04:00:00'),
    ('Apple iPhone 14', '6.1 inches, Apple A15 Bionic', 41499.0, '2022-02-24 04:00:00');
"""

FIND_ALL_SQL = "SELECT id, name, description, price, creation_date FROM products"
FIND_BY_ID_SQL = "SELECT id, name, description, price, creation_date FROM products WHERE id = ?"
ADD_SQL = "INSERT INTO products (name, description, price, creation_date) VALUES (?, ?, ?, ?)"
DELETE_BY_ID_SQL = "DELETE FROM products WHERE id = ?"
UPDATE_BY_ID_SQL = "UPDATE products SET name = ?, description = ?, price = ? WHERE id = ?"


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    description: str
    price: float
    creation_date: datetime


class ProductRowMapper:
    def map_row(self, result_set: ResultSet) -> Product:
        return Product(
            id=result_set.get_int("id"),
            name=result_set.get_string("name"),
            description=result_set.get_string("description"),
            price=result_set.get_double("price"),
            creation_date=result_set.get_timestamp("creation_date").to_local(),
        )


SAMSUNG = Product(1, "Samsung Galaxy M52", "6.7 inches, Qualcomm SM7325 Snapdragon 778G 5G", 13499.0, CREATED)
XIAOMI = Product(2, "Xiaomi Redmi Note 9 Pro", "6.67 inches, Qualcomm SM7125 Snapdragon 720G Octa-core", 11699.0, CREATED)
APPLE = Product(3, "Apple iPhone 14", "6.1 inches, Apple A15 Bionic", 41499.0, CREATED)
NOKIA = Product(4, "Nokia G11", "6.5 inches, Unisoc T606", 4499.0, CREATED)

EXPECTED_PRODUCTS = [SAMSUNG, XIAOMI, APPLE]
