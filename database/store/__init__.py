from .table_store import SqlAlchemyTableStore, TableStore, chunked

__all__ = ["TableStore", "SqlAlchemyTableStore", "chunked"]
