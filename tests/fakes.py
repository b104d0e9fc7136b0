# =============================================================================
# tests/fakes.py - In-memory stand-ins for Supabase, Resend and Stripe
# =============================================================================
# FakeSupabase implements the slice of the postgrest query builder the
# services use (select/insert/update/upsert/delete plus filters), backed by
# plain dicts so tests can seed rows and inspect what was written.
# =============================================================================

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from innovaport.modules.billing.gateway import StripeGateway
from innovaport.modules.notifications.email_client import EmailDeliveryError


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class FakeResult:
    def __init__(self, data: List[Dict[str, Any]], count: Optional[int] = None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.operation = "select"
        self.payload: Any = None
        self.on_conflict: Optional[str] = None
        self.count_mode: Optional[str] = None
        self.filters = []
        self.orders = []
        self.limit_count: Optional[int] = None
        self.range_bounds = None

    # Operations

    def select(self, columns: str = "*", count: Optional[str] = None):
        self.count_mode = count
        return self

    def insert(self, rows):
        self.operation = "insert"
        self.payload = rows
        return self

    def upsert(self, rows, on_conflict: Optional[str] = None):
        self.operation = "upsert"
        self.payload = rows
        self.on_conflict = on_conflict
        return self

    def update(self, values: Dict[str, Any]):
        self.operation = "update"
        self.payload = values
        return self

    def delete(self):
        self.operation = "delete"
        return self

    # Filters and modifiers

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) >= value)
        return self

    def lt(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) < value)
        return self

    def order(self, column, desc: bool = False):
        self.orders.append((column, desc))
        return self

    def limit(self, count: int):
        self.limit_count = count
        return self

    def range(self, start: int, end: int):
        self.range_bounds = (start, end)
        return self

    # Execution

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(f(row) for f in self.filters)

    def _new_row(self, values: Dict[str, Any]) -> Dict[str, Any]:
        row = dict(values)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", now_iso())
        self.db.rows(self.table_name).append(row)
        return row

    def execute(self) -> FakeResult:
        if (self.table_name, self.operation) in self.db.failures:
            raise Exception(f"{self.operation} on {self.table_name} failed")

        table = self.db.rows(self.table_name)

        if self.operation == "insert":
            rows = self.payload if isinstance(self.payload, list) else [self.payload]
            return FakeResult([dict(self._new_row(r)) for r in rows])

        if self.operation == "upsert":
            rows = self.payload if isinstance(self.payload, list) else [self.payload]
            keys = (self.on_conflict or "id").split(",")
            written = []
            for values in rows:
                existing = next(
                    (r for r in table if all(r.get(k) == values.get(k) for k in keys)),
                    None,
                )
                if existing is not None:
                    existing.update(values)
                    written.append(dict(existing))
                else:
                    written.append(dict(self._new_row(values)))
            return FakeResult(written)

        matched = [r for r in table if self._matches(r)]

        if self.operation == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResult([dict(r) for r in matched])

        if self.operation == "delete":
            self.db.tables[self.table_name] = [r for r in table if not self._matches(r)]
            return FakeResult([dict(r) for r in matched])

        for column, desc in reversed(self.orders):
            matched.sort(key=lambda r: (r.get(column) is None, r.get(column) if r.get(column) is not None else 0), reverse=desc)
        total = len(matched)
        if self.range_bounds:
            start, end = self.range_bounds
            matched = matched[start:end + 1]
        if self.limit_count is not None:
            matched = matched[:self.limit_count]
        count = total if self.count_mode == "exact" else None
        return FakeResult([dict(r) for r in matched], count=count)


class FakeAuthAdmin:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth
        self.deleted: List[str] = []
        self.signed_out: List[str] = []

    def create_user(self, attributes: Dict[str, Any]):
        if any(u.email == attributes["email"] for u in self.auth.users.values()):
            raise Exception("A user with this email address has already been registered")
        user = self.auth.make_user(attributes["email"], attributes.get("user_metadata") or {})
        return SimpleNamespace(user=user)

    def sign_out(self, jwt: str, scope: str = "global"):
        user = self.auth.tokens.pop(jwt, None)
        if user is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        self.signed_out.append(jwt)

    def delete_user(self, user_id: str):
        self.deleted.append(user_id)
        for token, user in list(self.auth.tokens.items()):
            if user.id == user_id:
                del self.auth.tokens[token]
        self.auth.users.pop(user_id, None)


class FakeAuth:
    """Auth API of one client; session clients share the user store of their parent"""

    def __init__(self, parent: Optional["FakeAuth"] = None):
        if parent is None:
            self.users: Dict[str, SimpleNamespace] = {}
            self.tokens: Dict[str, SimpleNamespace] = {}
            self.passwords: Dict[str, str] = {}
            self.admin = FakeAuthAdmin(self)
        else:
            self.users = parent.users
            self.tokens = parent.tokens
            self.passwords = parent.passwords
            self.admin = parent.admin
        self.session: Optional[SimpleNamespace] = None

    def make_user(self, email: str, user_metadata: Optional[Dict[str, Any]] = None, user_id: Optional[str] = None):
        user = SimpleNamespace(
            id=user_id or str(uuid.uuid4()),
            email=email,
            user_metadata=user_metadata or {},
            app_metadata={},
            created_at=now_iso(),
        )
        self.users[user.id] = user
        return user

    def issue_token(self, user) -> str:
        token = f"token-{user.id}"
        self.tokens[token] = user
        return token

    def sign_up(self, credentials: Dict[str, Any]):
        if any(u.email == credentials["email"] for u in self.users.values()):
            raise Exception("User already registered")
        user = self.make_user(credentials["email"], (credentials.get("options") or {}).get("data"))
        self.passwords[user.id] = credentials["password"]
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials: Dict[str, Any]):
        user = next((u for u in self.users.values() if u.email == credentials["email"]), None)
        if user is None or self.passwords.get(user.id) != credentials["password"]:
            raise Exception("Invalid login credentials")
        self.session = SimpleNamespace(access_token=self.issue_token(user))
        return SimpleNamespace(user=user, session=self.session)

    def get_user(self, jwt: str):
        user = self.tokens.get(jwt)
        if user is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)

    def sign_out(self):
        """Revokes whatever session this client last stored"""
        if self.session is not None:
            self.tokens.pop(self.session.access_token, None)
            self.session = None


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failures = set()
        self.auth = FakeAuth()
        self.session_clients: List["FakeSupabase"] = []

    def session_client(self) -> "FakeSupabase":
        """Per-request client over the same tables and users"""
        client = FakeSupabase.__new__(FakeSupabase)
        client.tables = self.tables
        client.failures = self.failures
        client.auth = FakeAuth(parent=self.auth)
        client.session_clients = []
        self.session_clients.append(client)
        return client

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.setdefault(table, [])

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, table: str, **values) -> Dict[str, Any]:
        row = dict(values)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", now_iso())
        self.rows(table).append(row)
        return row

    def fail(self, table: str, operation: str):
        self.failures.add((table, operation))


class FakeEmailClient:
    """Records every send; set fail=True to simulate a provider outage"""

    def __init__(self):
        self.sent: List[Dict[str, Any]] = []
        self.fail = False

    @property
    def is_configured(self) -> bool:
        return True

    async def send(self, to, subject, html, reply_to=None):
        if self.fail:
            raise EmailDeliveryError("E-mail API returned 503: unavailable")
        self.sent.append({"to": to, "subject": subject, "html": html, "reply_to": reply_to})
        return {"id": f"email-{len(self.sent)}"}

    def subjects(self) -> List[str]:
        return [m["subject"] for m in self.sent]


class FakeStripeGateway(StripeGateway):
    """Real webhook signature checks; API calls answered from in-memory objects"""

    def __init__(self, webhook_secret: str = "whsec_test_secret"):
        super().__init__("sk_test_fake", webhook_secret)
        self.subscriptions: Dict[str, Dict[str, Any]] = {}
        self.customers: Dict[str, Dict[str, Any]] = {}
        self.sessions: List[Dict[str, Any]] = []
        self.coupons: List[Dict[str, Any]] = []
        self.price_updates: List[tuple] = []

    def add_subscription(self, subscription: Dict[str, Any]) -> Dict[str, Any]:
        self.subscriptions[subscription["id"]] = subscription
        return subscription

    def retrieve_subscription(self, subscription_id: str) -> Dict[str, Any]:
        return self.subscriptions[subscription_id]

    def list_subscriptions(self, customer_id: str, limit: int = 10) -> List[Dict[str, Any]]:
        return [s for s in self.subscriptions.values() if s.get("customer") == customer_id][:limit]

    def update_subscription_price(self, subscription_id: str, item_id: str, price_id: str) -> Dict[str, Any]:
        self.price_updates.append((subscription_id, item_id, price_id))
        subscription = self.subscriptions[subscription_id]
        subscription["items"]["data"][0]["price"] = {"id": price_id}
        return subscription

    def retrieve_customer(self, customer_id: str) -> Dict[str, Any]:
        return self.customers.get(customer_id, {"id": customer_id, "metadata": {}})

    def find_customer_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return next((c for c in self.customers.values() if c.get("email") == email), None)

    def create_customer(self, email, name, metadata) -> Dict[str, Any]:
        customer = {"id": f"cus_{len(self.customers) + 1}", "email": email, "name": name, "metadata": metadata}
        self.customers[customer["id"]] = customer
        return customer

    def create_coupon(self, **params) -> Dict[str, Any]:
        self.coupons.append(params)
        return {"id": params["id"]}

    def create_checkout_session(self, **params) -> Dict[str, Any]:
        session = {"id": f"cs_test_{len(self.sessions) + 1}", "url": "https://checkout.stripe.test/session", **params}
        self.sessions.append(session)
        return session

    def retrieve_checkout_session(self, session_id: str) -> Dict[str, Any]:
        return next(s for s in self.sessions if s["id"] == session_id)


def stripe_subscription(
    subscription_id: str = "sub_123",
    customer: str = "cus_123",
    price_id: str = "price_pro_test",
    status: str = "active",
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "id": subscription_id,
        "object": "subscription",
        "customer": customer,
        "status": status,
        "cancel_at_period_end": False,
        "metadata": metadata or {},
        "items": {
            "data": [{
                "id": "si_1",
                "price": {"id": price_id},
                "current_period_start": 1767225600,
                "current_period_end": 1769904000,
            }]
        },
    }
