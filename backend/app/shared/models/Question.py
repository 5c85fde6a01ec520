# app/shared/models/Question.py
"""
Banque de questions du test d'intelligences multiples.

Une question = un énoncé Likert (1-5) rattaché à UNE catégorie.
CRUD par remplacement complet de l'enregistrement.
"""
from sqlalchemy import Column, String, Text

from app.core.database import Base


class Question(Base):
    __tablename__ = "questions"
    id   = Column(String,  primary_key=True, index=True)   # ex: "L1", "N5"
    text = Column(Text,    nullable=False)
    type = Column(String,  nullable=False, index=True)     # IntelligenceCategory.value

    @property
    def category(self) -> str:
        return self.type

    def __repr__(self):
        return f"<Question id={self.id} type={self.type}>"
