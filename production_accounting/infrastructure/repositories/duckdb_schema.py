"""
DuckDB table definitions for the production accounting store.
"""
from typing import Dict, List


class TableSchema:
    """Column layout and DDL for one table"""

    def __init__(self, table_name: str, columns: Dict[str, str], primary_key: List[str]):
        self.table_name = table_name
        self.columns = columns
        self.primary_key = primary_key

    def get_column_names(self) -> List[str]:
        """Get column names in table order"""
        return list(self.columns.keys())

    def get_sql_create_table(self) -> str:
        """Get the CREATE TABLE statement"""
        column_sql = ",\n    ".join(f"{name} {sql_type}" for name, sql_type in self.columns.items())
        return (
            f"CREATE TABLE IF NOT EXISTS {self.table_name} (\n"
            f"    {column_sql},\n"
            f"    PRIMARY KEY ({', '.join(self.primary_key)})\n"
            f")"
        )

    def get_sql_upsert(self) -> str:
        """Get an INSERT OR REPLACE statement with positional placeholders"""
        columns = self.get_column_names()
        placeholders = ", ".join("?" for _ in columns)
        return f"INSERT OR REPLACE INTO {self.table_name} ({', '.join(columns)}) VALUES ({placeholders})"

    def get_sql_insert(self) -> str:
        """Get a plain INSERT statement with positional placeholders"""
        columns = self.get_column_names()
        placeholders = ", ".join("?" for _ in columns)
        return f"INSERT INTO {self.table_name} ({', '.join(columns)}) VALUES ({placeholders})"


PRODUCTION_READING_SCHEMA = TableSchema(
    table_name="production_reading",
    columns={
        "well_id": "VARCHAR NOT NULL",
        "production_date": "DATE NOT NULL",
        "gross_oil_volume": "DOUBLE",
        "gross_gas_volume": "DOUBLE",
        "gross_water_volume": "DOUBLE",
        "operating_hours": "DOUBLE",
        "sand_water_percentage": "DOUBLE",
        "temperature": "DOUBLE",
        "flowing_tubing_pressure": "DOUBLE",
        "flowing_casing_pressure": "DOUBLE",
        "choke_size": "DOUBLE",
        "comments": "VARCHAR",
    },
    primary_key=["well_id", "production_date"]
)

STANDARDIZED_PRODUCTION_SCHEMA = TableSchema(
    table_name="standardized_production",
    columns={
        "well_id": "VARCHAR NOT NULL",
        "production_date": "DATE NOT NULL",
        "net_oil_volume": "DOUBLE NOT NULL",
        "std_gas_volume": "DOUBLE NOT NULL",
        "std_water_volume": "DOUBLE NOT NULL",
        "gor": "DOUBLE NOT NULL",
        "water_cut": "DOUBLE NOT NULL",
        "production_efficiency": "DOUBLE NOT NULL",
    },
    primary_key=["well_id", "production_date"]
)

WELL_TEST_SCHEMA = TableSchema(
    table_name="well_test",
    columns={
        "well_id": "VARCHAR NOT NULL",
        "test_date": "DATE NOT NULL",
        "oil_rate": "DOUBLE",
        "gas_rate": "DOUBLE",
        "water_rate": "DOUBLE",
        "test_type": "VARCHAR",
        "duration": "DOUBLE",
        "comments": "VARCHAR",
    },
    primary_key=["well_id", "test_date"]
)
