# tests/infra/test_session_store.py
"""
Tests unitaires pour infra.session_store.SessionStore

Couverture :
    - create / get / delete
    - Session inconnue → SessionNotFoundError
    - Expiration (TTL) et purge
    - État du collecteur stocké en dict (to_state), écrit par commit_collector()
"""
import pytest
from datetime import timedelta

from app.engine.intelligence.collector import ResponseCollector
from app.infra.session_store import SessionStore
from app.shared.exceptions import SessionNotFoundError
from tests.conftest import make_profile, make_question_pool, make_scored_result

pytestmark = pytest.mark.engine


def _create(store: SessionStore):
    return store.create(make_profile(), ResponseCollector(make_question_pool(1)))


class TestSessionStore:
    def test_create_puis_get(self):
        store = SessionStore()
        session = _create(store)
        assert store.get(session.id) is session
        assert session.result is None
        assert session.persisted is False

    def test_profil_copie(self):
        store = SessionStore()
        profile = make_profile()
        session = store.create(profile, ResponseCollector(make_question_pool(1)))
        profile["name"] = "Autre"
        assert session.profile["name"] == "Siti Aminah"

    def test_session_inconnue(self):
        with pytest.raises(SessionNotFoundError):
            SessionStore().get("inconnue")

    def test_delete(self):
        store = SessionStore()
        session = _create(store)
        assert store.delete(session.id) is True
        assert store.delete(session.id) is False
        with pytest.raises(SessionNotFoundError):
            store.get(session.id)

    def test_session_expiree(self):
        store = SessionStore(ttl_minutes=30)
        session = _create(store)
        session.touched -= timedelta(minutes=31)
        with pytest.raises(SessionNotFoundError):
            store.get(session.id)
        assert len(store) == 0

    def test_get_rafraichit_l_expiration(self):
        store = SessionStore(ttl_minutes=30)
        session = _create(store)
        session.touched -= timedelta(minutes=20)
        store.get(session.id)
        session.touched -= timedelta(minutes=20)
        assert store.get(session.id) is session

    def test_purge(self):
        store = SessionStore(ttl_minutes=30)
        old = _create(store)
        fresh = _create(store)
        old.touched -= timedelta(hours=1)
        assert store.purge_expired() == 1
        assert len(store) == 1
        assert store.get(fresh.id) is fresh


class TestEtatDuCollecteur:
    def test_etat_stocke_en_dict(self):
        session = _create(SessionStore())
        assert isinstance(session.state, dict)
        assert session.state["position"] == 0
        assert session.state["answers"] == {}
        assert len(session.state["questions"]) == 8

    def test_modification_visible_apres_commit(self):
        session = _create(SessionStore())
        collector = session.collector
        question_id = collector.current_question().id

        collector.record_answer(question_id, 4)
        assert session.collector.answer_for(question_id) is None

        session.commit_collector(collector)
        assert session.collector.answer_for(question_id) == 4
        assert session.state["answers"] == {question_id: 4}

    def test_soumise_des_qu_un_resultat_existe(self):
        session = _create(SessionStore())
        assert session.submitted is False
        session.result = make_scored_result()
        assert session.submitted is True
