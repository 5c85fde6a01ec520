# app/shared/models/Result.py
"""
Résultat d'un test complété.

TestResult.results (JSON) : toujours les 8 catégories :
    {"linguistic": 80, "logical": 100, ..., "naturalistic": 40}
TestResult.dominant_type : catégorie au score maximal (départage canonique)

Immuable après création, seule la suppression est permise.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON

from app.core.database import Base


class TestResult(Base):
    __tablename__ = "test_results"
    id            = Column(String(36), primary_key=True)             # uuid4 généré côté service
    name          = Column(String,  nullable=False, index=True)
    age           = Column(Integer, nullable=False)
    gender        = Column(String,  nullable=False)
    student_class = Column(String,  nullable=False, index=True)      # groupe / classe / profession
    date          = Column(DateTime(timezone=True), nullable=False, index=True)
    results       = Column(JSON,    nullable=False)
    dominant_type = Column(String,  nullable=False, index=True)

    # Empêche pytest de collecter ce modèle comme classe de test
    __test__ = False

    def __repr__(self):
        return f"<TestResult id={self.id} dominant={self.dominant_type}>"
