"""Persistence package."""

from riddler.persistence.save_gateway import FileSaveGateway, PersistenceGateway, parse_save_record

__all__ = [
    "PersistenceGateway",
    "FileSaveGateway",
    "parse_save_record",
]
