from sqlmodel import SQLModel

from pocketbook.database import engine, create_db_and_tables
from pocketbook.models import user, category, transaction  # noqa: F401

# Elimina y vuelve a crear todas las tablas del modelo
SQLModel.metadata.drop_all(engine)
create_db_and_tables()

print("✅ Base de datos reseteada correctamente (tablas recreadas).")
