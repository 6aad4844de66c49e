import os

import pytest
from sqlalchemy.exc import OperationalError
from streamlit.testing.v1 import AppTest

from inventory import crud
from inventory.workflow import AuditStatus

PAGES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "pages")
TRAVEL_PAGE = os.path.join(PAGES_DIR, "8_Business_Travel.py")


@pytest.fixture
def travel_app():
    at = AppTest.from_file(TRAVEL_PAGE, default_timeout=30)
    at.session_state["_logging_ready"] = True
    at.run()
    assert not at.exception
    return at


def _captions(at):
    return [caption.value for caption in at.caption]


def test_travel_caption_follows_cabin_class(travel_app):
    travel_app.selectbox(key="travel_transport").select_index(1).run()
    assert any("Select a cabin class" in text for text in _captions(travel_app))

    travel_app.selectbox(key="travel_cabin").select_index(2).run()
    assert any("0.134 kg CO₂e / pkm" in text for text in _captions(travel_app))

    travel_app.selectbox(key="travel_cabin").select_index(3).run()
    captions = _captions(travel_app)
    assert any("0.181 kg CO₂e / pkm" in text for text in captions)
    assert not any("0.134 kg CO₂e / pkm" in text for text in captions)


def test_cabin_select_disabled_off_plane(travel_app):
    travel_app.selectbox(key="travel_transport").select_index(3).run()

    assert travel_app.selectbox(key="travel_cabin").disabled
    assert any("0.045 kg CO₂e / pkm" in text for text in _captions(travel_app))


def test_submit_reports_audit_trail_failure(travel_app, monkeypatch):
    def _fail(session, transition, actor):
        raise OperationalError("INSERT INTO approval_logs", {}, Exception("database is locked"))

    monkeypatch.setattr(crud, "log_transition", _fail)
    travel_app.button(key="travel_submit").click().run()

    assert not travel_app.exception
    assert any("could not be recorded" in error.value for error in travel_app.error)
    state = travel_app.session_state["page_state_travel"]
    assert state.workflow.status == AuditStatus.DRAFT
    assert state.workflow.history == []


def test_submit_moves_page_to_submitted(travel_app):
    travel_app.button(key="travel_submit").click().run()

    assert not travel_app.exception
    state = travel_app.session_state["page_state_travel"]
    assert state.workflow.status == AuditStatus.SUBMITTED
    assert any("submitted for review" in message.value for message in travel_app.success)
