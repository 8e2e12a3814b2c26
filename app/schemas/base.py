from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Базовая схема: поля в snake_case, JSON в camelCase"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
