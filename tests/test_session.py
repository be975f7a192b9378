"""Tests for session state and the session store."""

import copy
import threading

from portal.session import (
    PlanAction,
    PlanStatus,
    Role,
    SessionState,
    SessionStore,
    build_default_state,
)


class TestSessionState:
    """Tests for SessionState."""

    def test_defaults(self):
        """Test a bare state is anonymous."""
        state = SessionState()
        assert state.role == Role.NONE
        assert state.authenticated is False
        assert state.last_auth_error is None
        assert state.selection is None

    def test_login(self):
        """Test login sets role and clears a previous error."""
        state = SessionState()
        state.fail_login("bad password")

        state.login(Role.CLINIC)

        assert state.authenticated is True
        assert state.role == Role.CLINIC
        assert state.last_auth_error is None

    def test_logout(self):
        """Test logout returns to the anonymous state."""
        state = SessionState()
        state.login(Role.PATIENT)

        state.logout()

        assert state.authenticated is False
        assert state.role == Role.NONE

    def test_fail_login_keeps_session_anonymous(self):
        """Test a failed login stores the message without authenticating."""
        state = SessionState()
        state.fail_login("Неверный логин или пароль")

        assert state.authenticated is False
        assert state.last_auth_error == "Неверный логин или пароль"

    def test_has_role_requires_authentication(self):
        """Test has_role is false for an unauthenticated session with a role set."""
        state = SessionState(role=Role.PATIENT, authenticated=False)
        assert state.has_role(Role.PATIENT) is False

        state.login(Role.PATIENT)
        assert state.has_role(Role.PATIENT) is True
        assert state.has_role(Role.CLINIC) is False


class TestDefaultState:
    """Tests for the seeded default state."""

    def test_seeded_records(self):
        """Test the default state carries the demo records."""
        state = build_default_state()
        records = state.records

        assert state.authenticated is False
        assert len(records.scans) == 2
        assert len(records.treatment_plan.diagnoses) == 3
        assert len(records.treatment_plan.procedures) == 3
        assert len(records.offers) == 3
        assert [plan.id for plan in records.incoming_plans] == [1, 2, 3, 4, 5]
        assert len(records.leads) == 2

    def test_seed_covers_plan_statuses(self):
        """Test the seed includes new, sent and expired plans."""
        statuses = {plan.status for plan in build_default_state().records.incoming_plans}
        assert {PlanStatus.NEW, PlanStatus.OFFER_SENT, PlanStatus.EXPIRED} <= statuses

    def test_each_call_is_independent(self):
        """Test two default states share no mutable records."""
        first = build_default_state()
        second = build_default_state()

        first.records.incoming_plans[0].status = PlanStatus.CALCULATED
        first.records.treatment_plan.diagnoses.append("extra")

        assert second.records.incoming_plans[0].status == PlanStatus.NEW
        assert len(second.records.treatment_plan.diagnoses) == 3


class TestPlanActions:
    """Tests for incoming plan mutations."""

    def test_calculate(self):
        """Test calculate sets the plan status to calculated."""
        records = build_default_state().records
        assert records.apply_plan_action(1, PlanAction.CALCULATE) is True
        assert records.find_plan(1).status == PlanStatus.CALCULATED

    def test_send(self):
        """Test send sets the plan status to offer_sent."""
        records = build_default_state().records
        assert records.apply_plan_action(3, PlanAction.SEND) is True
        assert records.find_plan(3).status == PlanStatus.OFFER_SENT

    def test_send_is_idempotent(self):
        """Test applying send twice equals applying it once."""
        once = build_default_state().records
        twice = build_default_state().records

        once.apply_plan_action(1, PlanAction.SEND)
        twice.apply_plan_action(1, PlanAction.SEND)
        twice.apply_plan_action(1, PlanAction.SEND)

        assert once == twice

    def test_unknown_plan_leaves_records_unchanged(self):
        """Test a non-matching plan ID changes nothing."""
        records = build_default_state().records
        before = copy.deepcopy(records)

        assert records.apply_plan_action(999, PlanAction.CALCULATE) is False
        assert records == before

    def test_only_status_changes(self):
        """Test the matched plan keeps its ID and position and others are untouched."""
        records = build_default_state().records
        before = copy.deepcopy(records.incoming_plans)

        records.apply_plan_action(4, PlanAction.CALCULATE)

        assert [plan.id for plan in records.incoming_plans] == [p.id for p in before]
        for plan, original in zip(records.incoming_plans, before, strict=True):
            if plan.id == 4:
                assert plan.status == PlanStatus.CALCULATED
                assert plan.procedures == original.procedures
            else:
                assert plan == original

    def test_action_target_status(self):
        """Test the fixed action to status mapping."""
        assert PlanAction.CALCULATE.target_status == PlanStatus.CALCULATED
        assert PlanAction.SEND.target_status == PlanStatus.OFFER_SENT

    def test_plans_with_status(self):
        """Test filtering plans by status."""
        records = build_default_state().records
        assert [plan.id for plan in records.plans_with_status(PlanStatus.EXPIRED)] == [5]


class TestSessionStore:
    """Tests for SessionStore."""

    def test_resolve_none_returns_fresh_state(self):
        """Test resolving without an identifier gives a new anonymous state."""
        store = SessionStore()

        state, session_id = store.resolve(None)

        assert session_id is None
        assert state.authenticated is False
        assert len(state.records.incoming_plans) == 5

    def test_resolve_does_not_store(self):
        """Test a resolve without persist leaves no trace."""
        store = SessionStore()

        store.resolve(None)
        store.resolve("never-persisted")

        assert store.count() == 0

    def test_unknown_ids_never_leak_state(self):
        """Test unrelated anonymous resolves get independent fresh states."""
        store = SessionStore()

        first, _ = store.resolve("unknown")
        first.login(Role.PATIENT)
        first.records.apply_plan_action(1, PlanAction.SEND)

        second, session_id = store.resolve("unknown")

        assert session_id is None
        assert second is not first
        assert second.authenticated is False
        assert second.records.find_plan(1).status == PlanStatus.NEW

    def test_persist_generates_identifier(self):
        """Test persist without an identifier stores the state under a new one."""
        store = SessionStore()
        state, _ = store.resolve(None)

        session_id = store.persist(None, state)

        assert session_id
        assert session_id in store
        assert store.count() == 1

    def test_persist_returns_unused_identifiers(self):
        """Test every new identifier is distinct."""
        store = SessionStore()
        ids = {store.persist(None, SessionState()) for _ in range(200)}
        assert len(ids) == 200
        assert store.count() == 200

    def test_persist_existing_identifier_overwrites(self):
        """Test persisting under a returned identifier replaces the entry."""
        store = SessionStore()
        session_id = store.persist(None, SessionState())

        replacement = SessionState()
        replacement.login(Role.GOVERNMENT)
        returned = store.persist(session_id, replacement)

        assert returned == session_id
        assert store.count() == 1
        state, _ = store.resolve(session_id)
        assert state is replacement

    def test_resolve_returns_live_reference(self):
        """Test mutations on a stored state are visible without persist."""
        store = SessionStore()
        session_id = store.persist(None, build_default_state())

        state, resolved_id = store.resolve(session_id)
        assert resolved_id == session_id
        state.login(Role.CLINIC)
        state.records.apply_plan_action(4, PlanAction.CALCULATE)

        again, _ = store.resolve(session_id)
        assert again is state
        assert again.has_role(Role.CLINIC)
        assert again.records.find_plan(4).status == PlanStatus.CALCULATED

    def test_custom_state_factory(self):
        """Test the store builds new sessions with the given factory."""
        store = SessionStore(state_factory=lambda: SessionState(selection="preset"))
        state, _ = store.resolve(None)
        assert state.selection == "preset"

    def test_login_logout_scenario(self):
        """Test the anonymous -> authenticated -> anonymous lifecycle."""
        store = SessionStore()

        state, session_id = store.resolve(None)
        assert state.authenticated is False
        assert session_id is None

        state.login(Role.PATIENT)
        session_id = store.persist(session_id, state)

        resolved, _ = store.resolve(session_id)
        assert resolved.authenticated is True
        assert resolved.role == Role.PATIENT

        resolved.logout()
        store.persist(session_id, resolved)

        after, _ = store.resolve(session_id)
        assert after.authenticated is False

    def test_concurrent_persist(self):
        """Test concurrent new sessions all get distinct stored identifiers."""
        store = SessionStore()
        ids: list[str] = []
        ids_lock = threading.Lock()

        def worker():
            for _ in range(50):
                state, session_id = store.resolve(None)
                new_id = store.persist(session_id, state)
                store.resolve(new_id)
                with ids_lock:
                    ids.append(new_id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(ids) == 400
        assert len(set(ids)) == 400
        assert store.count() == 400
