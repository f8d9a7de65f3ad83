import logging

from sqlalchemy import bindparam, create_engine, inspect, literal, text
from sqlalchemy.orm import sessionmaker, declarative_base

from checkmate.core.config import settings

logger = logging.getLogger(__name__)


def make_engine(url: str, echo: bool = False):
    # SQLite: un seul engine partagé entre les threads des requêtes
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """Dépendance sessionDB"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind) -> list:
    """Crée les tables manquantes puis ajoute les colonnes manquantes.

    Réconciliation additive uniquement: aucune colonne existante n'est
    modifiée ou supprimée. Retourne la liste des colonnes ajoutées
    sous la forme "table.colonne".
    """
    # Enregistre les modèles sur Base.metadata
    import checkmate.models.task  # noqa: F401

    Base.metadata.create_all(bind=bind)

    added = []
    inspector = inspect(bind)
    for table in Base.metadata.sorted_tables:
        existing = {col["name"] for col in inspector.get_columns(table.name)}
        for column in table.columns:
            if column.name in existing:
                continue
            col_type = column.type.compile(dialect=bind.dialect)
            ddl = f"ALTER TABLE {table.name} ADD COLUMN {column.name} {col_type}"
            default = column.default
            if default is not None and default.is_scalar:
                # DEFAULT: les lignes existantes prennent la valeur par défaut
                value = literal(default.arg, type_=column.type).compile(
                    dialect=bind.dialect, compile_kwargs={"literal_binds": True}
                )
                ddl += f" DEFAULT {value}"
            with bind.begin() as conn:
                conn.execute(text(ddl))
                if default is not None and default.is_callable:
                    # ex: created_at=utcnow, calculé une fois pour les lignes existantes
                    backfill = text(
                        f"UPDATE {table.name} SET {column.name} = :value WHERE {column.name} IS NULL"
                    ).bindparams(bindparam("value", type_=column.type))
                    conn.execute(backfill, {"value": default.arg(None)})
            for index in table.indexes:
                if column.name in index.columns:
                    index.create(bind=bind, checkfirst=True)
            added.append(f"{table.name}.{column.name}")
            logger.info(f"Added missing column {table.name}.{column.name}")
    return added
