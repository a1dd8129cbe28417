"""HTTP surface: routes, status codes and error envelopes."""
from pathlib import Path

from fastapi.testclient import TestClient
from mangum import Mangum
from sqlalchemy import update
from sqlmodel import SQLModel

from conftest import add_category, add_set, add_single
from quizbank.core.settings import settings
from quizbank.main import app, handler
from quizbank.models.questions import ComprehensionQuestionSet

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True
    assert r.headers["content-type"] == "application/json; charset=utf-8"


def test_lambda_handler_wraps_app():
    assert isinstance(handler, Mangum)


# ------------------------------- /questions -------------------------------
def test_questions_requires_subject_and_grade(client):
    r = client.post("/questions", json={"subject": "English"})
    assert r.status_code == 400
    assert r.json() == {"error": "Subject and grade are required"}


def test_questions_rejects_non_object_body(client):
    r = client.post("/questions", json=["English", "3"])
    assert r.status_code == 400


def test_questions_unknown_category(client):
    r = client.post("/questions", json={"subject": "Mathematics", "grade": "3"})
    assert r.status_code == 404
    assert r.json() == {"error": "Category not found"}
    assert r.headers["content-type"] == "application/json; charset=utf-8"


def test_questions_single_answer_quiz(client, session):
    cid = add_category(session, "Mathematics", "3")
    for _ in range(17):
        add_single(session, cid)

    r = client.post("/questions", json={"subject": "Mathematics", "grade": 3})

    assert r.status_code == 200
    body = r.json()
    assert len(body) == 15
    assert all(set(q) == {"_id", "question", "options"} for q in body)


def test_questions_comprehension_quiz_for_english(client, session):
    cid = add_category(session, "english", "3")
    add_set(session, cid, ["A", "B", "C"])

    r = client.post("/questions", json={"subject": "english", "grade": "3"})

    assert r.status_code == 200
    (view,) = r.json()
    assert view["comprehension"] == "A short passage."
    assert len(view["questions"]) == 3
    assert view["correctAnswers"] == ["A", "B", "C"]


def test_questions_comprehension_answers_can_be_hidden(client, session, monkeypatch):
    monkeypatch.setattr(settings, "EXPOSE_COMPREHENSION_ANSWERS", False)
    cid = add_category(session, "English", "3")
    add_set(session, cid, ["A"])

    (view,) = client.post("/questions", json={"subject": "English", "grade": "3"}).json()

    assert "correctAnswers" not in view
    assert "explanations" not in view


def test_questions_store_failure_is_500(client, engine):
    SQLModel.metadata.drop_all(engine)
    r = client.post("/questions", json={"subject": "Mathematics", "grade": "3"})
    assert r.status_code == 500
    assert "error" in r.json()


# --------------------------- /fetch_quiz_results ---------------------------
def test_results_rejects_non_list(client):
    r = client.post("/fetch_quiz_results", json={"questionAnswers": {"id": "q1", "answer": "B"}})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid input format"}


def test_results_rejects_missing_field(client):
    r = client.post("/fetch_quiz_results", json={})
    assert r.status_code == 400


def test_results_rejects_invalid_json(client):
    r = client.post("/fetch_quiz_results", content=b"{oops", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid input format"}


def test_results_correct_single_answer(client, session):
    cid = add_category(session)
    add_single(session, cid, correct_answer="B", id="q1")

    r = client.post("/fetch_quiz_results", json={"questionAnswers": [{"id": "q1", "answer": "B"}]})

    assert r.status_code == 200
    body = r.json()
    assert body["correct_answers"] == 1
    assert body["total_questions"] == 1


def test_results_wrong_single_answer_keeps_record(client, session):
    cid = add_category(session)
    add_single(session, cid, correct_answer="B", id="q1")

    body = client.post("/fetch_quiz_results", json={"questionAnswers": [{"id": "q1", "answer": "C"}]}).json()

    assert body["correct_answers"] == 0
    assert body["total_questions"] == 1
    (rec,) = body["normal_questions"]
    assert rec["user_answer"] == "C"
    assert rec["correct_answer"] == "B"
    assert rec["explanation"] == "the answer is B"


def test_results_comprehension_length_gate(client, session):
    cid = add_category(session, "English", "3")
    add_set(session, cid, ["A", "C"], id="c1")
    add_single(session, cid, correct_answer="A", id="q1")

    payload = {"questionAnswers": [{"id": "c1", "answer": ["A"]}, {"id": "q1", "answer": "A"}]}
    body = client.post("/fetch_quiz_results", json=payload).json()

    assert body["comprehension_questions"] == []
    assert body["total_questions"] == 1
    assert body["correct_answers"] == 1


def test_results_comprehension_partial_credit(client, session):
    cid = add_category(session, "English", "3")
    add_set(session, cid, ["A", "C"], id="c1")

    body = client.post("/fetch_quiz_results", json={"questionAnswers": [{"id": "c1", "answer": ["A", "D"]}]}).json()

    assert body["correct_answers"] == 1
    assert body["total_questions"] == 2
    (rec,) = body["comprehension_questions"]
    assert rec["user_answers"] == ["A", "D"]
    assert rec["correct_answers"] == ["A", "C"]
    assert rec["questions"] == ["sub question 0", "sub question 1"]


def test_results_tolerate_null_sub_answer_and_malformed_items(client, session):
    cid = add_category(session, "English", "3")
    add_set(session, cid, ["A", "C"], id="c1")
    add_single(session, cid, correct_answer="A", id="q1")

    payload = {
        "questionAnswers": [
            {"id": "c1", "answer": ["A", None]},
            {"id": "q1", "answer": "A"},
            {"answer": "B"},
            {"id": 7, "answer": "B"},
            "q1",
        ]
    }
    r = client.post("/fetch_quiz_results", json=payload)

    assert r.status_code == 200
    body = r.json()
    assert body["total_questions"] == 3
    assert body["correct_answers"] == 2
    (rec,) = body["comprehension_questions"]
    assert rec["user_answers"] == ["A", None]


def test_results_stored_set_with_missing_keys(client, session, engine):
    cid = add_category(session, "English", "3")
    add_set(session, cid, ["A", "C", "D"], id="c1")
    table = ComprehensionQuestionSet.__table__
    with engine.begin() as conn:
        conn.execute(update(table).where(table.c.id == "c1").values(correct_answers=["A"]))

    r = client.post("/fetch_quiz_results", json={"questionAnswers": [{"id": "c1", "answer": ["A", "C", "D"]}]})

    assert r.status_code == 200
    body = r.json()
    assert body["total_questions"] == 3
    assert body["correct_answers"] == 1
    assert body["comprehension_questions"][0]["correct_answers"] == ["A"]


def test_results_unknown_ids_are_omitted(client):
    body = client.post(
        "/fetch_quiz_results",
        json={"questionAnswers": [{"id": "does-not-exist", "answer": "A"}, {"id": "not-an-id-at-all!", "answer": ["A"]}]},
    ).json()
    assert body == {"normal_questions": [], "comprehension_questions": [], "correct_answers": 0, "total_questions": 0}


def test_results_empty_submission(client):
    body = client.post("/fetch_quiz_results", json={"questionAnswers": []}).json()
    assert body["total_questions"] == 0


def test_results_store_failure_is_500(client, engine):
    SQLModel.metadata.drop_all(engine)
    r = client.post("/fetch_quiz_results", json={"questionAnswers": [{"id": "q1", "answer": "B"}]})
    assert r.status_code == 500
    assert "error" in r.json()


# -------------------------------- imports --------------------------------
def test_import_json_route(client, monkeypatch):
    monkeypatch.setattr(settings, "IMPORT_DIR", str(DATA_DIR))
    r = client.post("/import-json")
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Data imported successfully!"
    assert body["imported"] == 2


def test_import_math_route(client, monkeypatch):
    monkeypatch.setattr(settings, "IMPORT_DIR", str(DATA_DIR))
    r = client.post("/import-math-questions")
    assert r.status_code == 200
    assert r.json()["message"] == "Math questions imported successfully!"
    assert r.json()["imported"] == 3


def test_import_route_missing_file(client, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "IMPORT_DIR", str(tmp_path))
    r = client.post("/import-json")
    assert r.status_code == 500
    body = r.json()
    assert body["message"] == "Error importing data"
    assert "error" in body

    r = client.post("/import-math-questions")
    assert r.status_code == 500
    assert r.json()["message"] == "Error importing questions"


# ------------------------------- round trip -------------------------------
def test_quiz_round_trip(client, monkeypatch):
    monkeypatch.setattr(settings, "IMPORT_DIR", str(DATA_DIR))
    assert client.post("/import-math-questions").status_code == 200

    quiz = client.post("/questions", json={"subject": "Mathematics", "grade": "3"}).json()
    assert len(quiz) == 3

    answers = [{"id": q["_id"], "answer": "A"} for q in quiz]
    report = client.post("/fetch_quiz_results", json={"questionAnswers": answers}).json()

    assert report["total_questions"] == 3
    # only "What is 4 x 3?" has A as its key
    assert report["correct_answers"] == 1
    assert {r["id"] for r in report["normal_questions"]} == {q["_id"] for q in quiz}


def test_cors_allows_configured_origin(engine):
    c = TestClient(app)
    r = c.options(
        "/questions",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://localhost:3000"
