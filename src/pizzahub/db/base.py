from sqlalchemy.orm import declarative_base

# Base для моделей
Base = declarative_base()
