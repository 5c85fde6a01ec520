# app/content/default_questions.py
"""
Banque de questions embarquée : 5 questions par catégorie, 40 au total.

Utilisée :
- en repli quand la base est injoignable ou vide (FallbackQuestionRepository)
- par le seed initial (app/seed/seed_questions.py)
"""
from typing import Dict, List

DEFAULT_QUESTIONS: List[Dict[str, str]] = [
    # ── Linguistique ─────────────────────────────────────────
    {"id": "L1",  "category": "linguistic",    "text": "J'aime lire des livres et des articles pendant mon temps libre."},
    {"id": "L2",  "category": "linguistic",    "text": "J'explique facilement des idées complexes aux autres."},
    {"id": "L3",  "category": "linguistic",    "text": "J'apprécie les jeux de mots comme les mots croisés ou le Scrabble."},
    {"id": "L4",  "category": "linguistic",    "text": "Je retiens facilement des citations ou des expressions."},
    {"id": "L5",  "category": "linguistic",    "text": "J'aime écrire des histoires, un journal ou des lettres."},

    # ── Logico-mathématique ──────────────────────────────────
    {"id": "LM1", "category": "logical",       "text": "Je calcule de tête avec facilité."},
    {"id": "LM2", "category": "logical",       "text": "J'aime résoudre des énigmes et des problèmes de logique."},
    {"id": "LM3", "category": "logical",       "text": "Je cherche à comprendre la cause de chaque phénomène."},
    {"id": "LM4", "category": "logical",       "text": "J'aime classer et organiser les informations de façon méthodique."},
    {"id": "LM5", "category": "logical",       "text": "Les expériences scientifiques m'intéressent."},

    # ── Musicale ─────────────────────────────────────────────
    {"id": "MU1", "category": "musical",       "text": "Je repère facilement une fausse note."},
    {"id": "MU2", "category": "musical",       "text": "Je retiens une mélodie après l'avoir entendue une ou deux fois."},
    {"id": "MU3", "category": "musical",       "text": "Je tapote souvent des rythmes en travaillant."},
    {"id": "MU4", "category": "musical",       "text": "Je joue d'un instrument ou je chante régulièrement."},
    {"id": "MU5", "category": "musical",       "text": "La musique influence fortement mon humeur."},

    # ── Kinesthésique ────────────────────────────────────────
    {"id": "K1",  "category": "bodily",        "text": "Je pratique régulièrement un sport ou une activité physique."},
    {"id": "K2",  "category": "bodily",        "text": "J'apprends mieux en manipulant qu'en lisant."},
    {"id": "K3",  "category": "bodily",        "text": "J'aime les travaux manuels : bricolage, couture, modelage."},
    {"id": "K4",  "category": "bodily",        "text": "Je gesticule beaucoup quand je parle."},
    {"id": "K5",  "category": "bodily",        "text": "J'ai du mal à rester assis longtemps sans bouger."},

    # ── Spatiale ─────────────────────────────────────────────
    {"id": "S1",  "category": "spatial",       "text": "Je lis facilement une carte ou un plan."},
    {"id": "S2",  "category": "spatial",       "text": "Je visualise clairement des images dans ma tête."},
    {"id": "S3",  "category": "spatial",       "text": "J'aime dessiner, peindre ou faire des croquis."},
    {"id": "S4",  "category": "spatial",       "text": "Je m'oriente facilement dans un lieu inconnu."},
    {"id": "S5",  "category": "spatial",       "text": "Les schémas et les graphiques m'aident à comprendre."},

    # ── Interpersonnelle ─────────────────────────────────────
    {"id": "IE1", "category": "interpersonal", "text": "Mes amis viennent souvent me demander conseil."},
    {"id": "IE2", "category": "interpersonal", "text": "Je préfère travailler en groupe plutôt que seul."},
    {"id": "IE3", "category": "interpersonal", "text": "Je perçois facilement ce que ressentent les autres."},
    {"id": "IE4", "category": "interpersonal", "text": "J'aime organiser des activités avec d'autres personnes."},
    {"id": "IE5", "category": "interpersonal", "text": "Je sais apaiser un conflit entre deux personnes."},

    # ── Intrapersonnelle ─────────────────────────────────────
    {"id": "IA1", "category": "intrapersonal", "text": "Je prends régulièrement du temps pour réfléchir seul."},
    {"id": "IA2", "category": "intrapersonal", "text": "Je connais bien mes forces et mes faiblesses."},
    {"id": "IA3", "category": "intrapersonal", "text": "Je me fixe des objectifs personnels et je les suis."},
    {"id": "IA4", "category": "intrapersonal", "text": "Je sais identifier précisément mes émotions."},
    {"id": "IA5", "category": "intrapersonal", "text": "Je tiens un journal ou je note mes réflexions."},

    # ── Naturaliste ──────────────────────────────────────────
    {"id": "N1",  "category": "naturalistic",  "text": "J'aime les activités en plein air et être dans la nature."},
    {"id": "N2",  "category": "naturalistic",  "text": "Je reconnais et classe différentes plantes ou animaux."},
    {"id": "N3",  "category": "naturalistic",  "text": "Les questions d'environnement m'intéressent."},
    {"id": "N4",  "category": "naturalistic",  "text": "Je remarque les changements et les cycles de la nature."},
    {"id": "N5",  "category": "naturalistic",  "text": "J'aime apprendre comment fonctionnent les phénomènes naturels."},
]


def default_question_models() -> list:
    """Instances ORM transitoires (jamais ajoutées à une session)."""
    from app.shared.models import Question

    return [Question(id=q["id"], text=q["text"], type=q["category"]) for q in DEFAULT_QUESTIONS]
