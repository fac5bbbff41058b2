from print_quote.api.chat import get_assistant
from print_quote.main import app
from print_quote.services.ai import AIServiceError
from print_quote.services.chat import ChatAssistant

FLYER = {
    "serviceType": "printing",
    "productType": "flyer",
    "size": "A4",
    "quantity": 1000,
    "paperType": "standard",
    "printColors": "black-and-white",
    "finishing": ["none"],
}


class FakeClient:
    def __init__(self, text="OK", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate(self, system_prompt, user_text):
        self.calls.append(user_text)
        if self.error:
            raise self.error
        return self.text


def _use_client(fake):
    app.dependency_overrides[get_assistant] = lambda: ChatAssistant(client=fake)


def test_root(client):
    assert client.get("/").json() == {"status": "ok", "service": "print-quote-estimator"}


def test_estimate_returns_camel_case_quote(client):
    resp = client.post("/quotes/estimate", json=FLYER)
    assert resp.status_code == 200
    body = resp.json()
    assert body["price"] == 42500
    assert body["turnaround"] == 5
    assert body["discountApplied"] == 0.15
    assert body["specs"]["productType"] == "flyer"
    assert body["id"].startswith("Q-")


def test_estimate_omits_absent_discount(client):
    body = client.post("/quotes/estimate", json=dict(FLYER, quantity=100)).json()
    assert body["price"] == 5000
    assert "discountApplied" not in body


def test_estimate_rejects_incomplete_spec(client):
    resp = client.post("/quotes/estimate", json=dict(FLYER, paperType="", quantity=0))
    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["decision"] == "invalid"
    assert "missing_paper_type" in detail["issues"]
    assert "invalid_quantity" in detail["issues"]


def test_estimate_rejects_non_numeric_quantity(client):
    assert client.post("/quotes/estimate", json=dict(FLYER, quantity="lots")).status_code == 422


def test_quote_crud(client):
    created = client.post("/quotes", json=FLYER)
    assert created.status_code == 201
    quote = created.json()
    assert "createdAt" in quote

    listed = client.get("/quotes").json()
    assert [q["id"] for q in listed] == [quote["id"]]
    assert client.get(f"/quotes/{quote['id']}").json()["price"] == 42500

    assert client.delete(f"/quotes/{quote['id']}").json() == {"ok": True, "id": quote["id"]}
    assert client.get(f"/quotes/{quote['id']}").status_code == 404
    assert client.delete(f"/quotes/{quote['id']}").status_code == 404


def test_validate_endpoint(client):
    body = client.post("/validate/", json={"serviceType": "binding", "productType": "hardcover-book"}).json()
    assert body == {"decision": "invalid", "issues": ["missing_binding_type"]}


def test_admin_views(client):
    client.post("/quotes", json=FLYER)
    client.post("/quotes", json={"serviceType": "logistics", "weight": 5, "deliverySpeed": "express", "quantity": 50})

    rows = client.get("/admin/quotes").json()
    assert {r["serviceType"] for r in rows} == {"printing", "logistics"}
    flyer = next(r for r in rows if r["serviceType"] == "printing")
    assert flyer["productType"] == "flyer"
    assert flyer["discountApplied"] == 0.15
    assert "service_type" not in flyer

    summary = client.get("/admin/summary").json()
    assert summary["totalQuotes"] == 2
    assert summary["totalValue"] == 42500 + 9900
    assert summary["byService"] == {"printing": 1, "logistics": 1}

    html = client.get("/admin/quotes", headers={"accept": "text/html"})
    assert html.headers["content-type"].startswith("text/html")
    assert "¥42,500" in html.text
    assert "15% (-¥7,500)" in html.text
    assert "A4 / 普通紙 / モノクロ / なし" in html.text
    assert "物流" in html.text


def test_chat_message_with_quote(client):
    _use_client(FakeClient("見積もりを作成しました。"))
    resp = client.post("/chat/messages", json={"content": "チラシの見積もりをお願いします", "language": "ja"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["serviceType"] == "printing"
    assert body["message"]["content"] == "見積もりを作成しました。"
    assert body["quote"]["price"] == 5000


def test_chat_message_upstream_failure(client):
    _use_client(FakeClient(error=AIServiceError("API key is not set")))
    resp = client.post("/chat/messages", json={"content": "hello"})
    assert resp.status_code == 502
    assert resp.json()["detail"] == "API key is not set"


def test_chat_message_blank(client):
    _use_client(FakeClient())
    assert client.post("/chat/messages", json={"content": "   "}).status_code == 400


def test_chat_message_sends_only_latest_text(client):
    fake = FakeClient()
    _use_client(fake)
    earlier = client.get("/chat/welcome").json()
    resp = client.post("/chat/messages", json={"content": "製本について", "history": [earlier]})
    assert resp.status_code == 200
    assert fake.calls == ["製本について"]


def test_chat_welcome_and_export(client):
    welcome = client.get("/chat/welcome", params={"language": "en"}).json()
    assert welcome["sender"] == "ai"

    resp = client.post("/chat/export", json={"messages": [welcome]})
    assert resp.status_code == 200
    assert "attachment; filename=\"chat-history-" in resp.headers["content-disposition"]
    assert "AIアシスタント:" in resp.text


def test_chat_logs_endpoints(client):
    welcome = client.get("/chat/welcome").json()
    saved = client.post("/chat/logs", json={"messages": [welcome], "serviceType": "binding", "quoteGenerated": True})
    assert saved.status_code == 201
    log_id = saved.json()["id"]

    logs = client.get("/chat/logs").json()
    assert logs[0]["id"] == log_id
    assert logs[0]["serviceType"] == "binding"
    assert logs[0]["quoteGenerated"] is True

    client.delete(f"/chat/logs/{log_id}")
    assert client.get("/chat/logs").json() == []

    client.post("/chat/logs", json={"messages": [welcome]})
    client.delete("/chat/logs")
    assert client.get("/chat/logs").json() == []
