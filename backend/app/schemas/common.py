"""
Éléments communs aux schémas : noms camelCase côté JSON, enveloppe de réponse.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Attributs snake_case en Python, camelCase dans le JSON échangé."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageResponse(BaseModel):
    success: bool = True
    message: str
