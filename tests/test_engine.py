"""Tests for LifeEngine operations."""

import random

from minilife import codec
from minilife.achievements import ACHIEVEMENTS
from minilife.engine import BANKRUPTCY_CAUSE, LifeEngine
from minilife.models import Job, LifeRules, Person, PlayerState, Settings

BOUNDED = ("happiness", "health", "smarts", "looks")


def _engine(rng=None, rules=None, **fields) -> LifeEngine:
    fields.setdefault("name", "Test")
    return LifeEngine(PlayerState(**fields), rng=rng or random.Random(1), rules=rules)


def _texts(engine: LifeEngine) -> list[str]:
    return [e.text for e in engine.state.log]


def _emma(**fields) -> Person:
    fields.setdefault("id", "p1")
    fields.setdefault("name", "Emma")
    fields.setdefault("relation", "parent")
    return Person(**fields)


# ── Construction & read access ──────────────────────────────


def test_fresh_engine_creates_life():
    engine = LifeEngine()
    state = engine.state
    assert state.name
    assert state.age == 0
    assert len(state.people) >= 3
    assert _texts(engine) == ["You were born."]


def test_state_is_a_copy():
    engine = _engine(money=100)
    engine.state.money = 999999
    engine.state.people.append(_emma())
    assert engine.state.money == 100
    assert engine.state.people == []


def test_default_rng_seeded_from_state():
    record = codec.to_record(LifeEngine(rng=random.Random(8)).state)
    a = LifeEngine(codec.from_record(record))
    b = LifeEngine(codec.from_record(record))
    for _ in range(30):
        a.advance_year()
        b.advance_year()
    assert a.state.model_dump(exclude={"log"}) == b.state.model_dump(exclude={"log"})
    assert _texts(a) == _texts(b)


# ── advance_year ────────────────────────────────────────────


def test_age_increments_by_one_while_alive():
    for seed in range(10):
        engine = LifeEngine(rng=random.Random(seed))
        for _ in range(120):
            before = engine.state
            engine.advance_year()
            after = engine.state
            if before.alive:
                assert after.age == before.age + 1
            else:
                assert after.age == before.age


def test_bounded_stats_stay_in_range():
    for seed in range(10):
        engine = LifeEngine(rng=random.Random(seed))
        actions = ["talk", "compliment", "gift", "spend_time", "insult", "ask_for_money"]
        rng = random.Random(seed)
        for _ in range(100):
            engine.advance_year()
            engine.perform_activity(rng.choice(["read", "jog", "party", "study"]))
            person = rng.choice(engine.state.people)
            engine.interact_with_person(person.id, rng.choice(actions))
            state = engine.state
            for stat in BOUNDED:
                assert 0 <= getattr(state, stat) <= 100
            for p in state.people:
                assert 0 <= p.relationship <= 100
                assert p.age >= 1


def test_drift_low(fixed_random):
    engine = _engine(fixed_random(value=0.99, pick="low"))
    assert engine.advance_year().ok
    s = engine.state
    assert (s.happiness, s.health, s.smarts, s.looks) == (58, 66, 50, 48)


def test_drift_high(fixed_random):
    engine = _engine(fixed_random(value=0.99, pick="high"))
    engine.advance_year()
    s = engine.state
    assert (s.happiness, s.health, s.smarts, s.looks) == (63, 72, 52, 51)


def test_drift_clamped(fixed_random):
    engine = _engine(fixed_random(value=0.99, pick="high"), happiness=100, looks=100)
    engine.advance_year()
    assert engine.state.happiness == 100
    assert engine.state.looks == 100
    engine = _engine(fixed_random(value=0.99, pick="low"), health=1)
    engine.advance_year()
    assert engine.state.health == 0


def test_salary_credited(fixed_random):
    job = Job(id="cashier", title="Cashier", pay=200)
    engine = _engine(fixed_random(value=0.99), age=20, job=job)
    engine.advance_year()
    assert engine.state.money == 300
    assert "Worked as Cashier and earned $200." in _texts(engine)


def test_no_event_when_roll_misses(fixed_random):
    engine = _engine(fixed_random(value=0.99), age=30, achievements={"Age 18": True})
    engine.advance_year()
    assert _texts(engine) == []


def test_event_applied(fixed_random):
    # age 18 → adult band, second template is the promotion
    engine = _engine(fixed_random(value=0.0, pick="high", index=1), age=17)
    engine.advance_year()
    assert engine.state.money == 1100
    assert "You got a promotion!" in _texts(engine)


def test_relation_death_logged_once(fixed_random):
    engine = _engine(fixed_random(value=0.0), age=30, people=[_emma(age=200, relationship=50)])
    engine.advance_year()
    state = engine.state
    person = state.people[0]
    assert person.alive is False
    assert person.history == ["Died at age 200"]
    assert "Emma died at age 200." in _texts(engine)
    # drift -2, death penalty -3
    assert state.happiness == 55

    engine.advance_year()
    assert _texts(engine).count("Emma died at age 200.") == 1
    assert len(engine.state.people) == 1


def test_elder_mortality(fixed_random):
    engine = _engine(fixed_random(value=0.0), age=120)
    outcome = engine.advance_year()
    assert outcome.ok
    assert engine.state.alive is False
    assert "Death: At 121, your body gave out." in _texts(engine)


def test_no_mortality_roll_before_elder_age(fixed_random):
    engine = _engine(fixed_random(value=0.0), age=50)
    engine.advance_year()
    assert engine.state.alive is True


def test_bankruptcy_deterministic(fixed_random):
    sources = [random.Random(seed) for seed in range(25)]
    sources += [fixed_random(value=0.0, pick="high"), fixed_random(value=0.99, pick="low")]
    for rng in sources:
        engine = _engine(rng, money=-5001)
        engine.advance_year()
        assert engine.state.alive is False
        assert f"Death: {BANKRUPTCY_CAUSE}" in _texts(engine)


def test_bankruptcy_checked_after_income(fixed_random):
    job = Job(id="cashier", title="Cashier", pay=200)
    engine = _engine(fixed_random(value=0.99), money=-5050, job=job)
    engine.advance_year()
    assert engine.state.money == -4850
    assert engine.state.alive is True


def test_bankruptcy_overrides_old_age(fixed_random):
    engine = _engine(fixed_random(value=0.0), age=99, money=-6000)
    engine.advance_year()
    deaths = [t for t in _texts(engine) if t.startswith("Death:")]
    assert deaths == [f"Death: {BANKRUPTCY_CAUSE}"]


def test_dead_player_is_frozen():
    engine = _engine(alive=False, age=50, money=10)
    before = engine.state
    for _ in range(5):
        outcome = engine.advance_year()
        assert not outcome.ok
        assert outcome.code == "deceased"
    assert engine.state == before


def test_adulthood_achievement_on_birthday(fixed_random):
    engine = _engine(fixed_random(value=0.99), age=17)
    outcome = engine.advance_year()
    assert outcome.achievements == ["Age 18"]
    assert engine.state.achievements == {"Age 18": True}


# ── perform_activity ────────────────────────────────────────


def test_perform_activity():
    engine = _engine(money=100)
    outcome = engine.perform_activity("party")
    assert outcome.ok
    s = engine.state
    assert (s.happiness, s.health, s.money) == (68, 68, 50)
    assert _texts(engine)[-1] == "It was wild. Fun but expensive."


def test_activity_clamps():
    engine = _engine(smarts=99)
    engine.perform_activity("study")
    assert engine.state.smarts == 100


def test_unknown_activity_is_noop():
    engine = _engine()
    before = engine.state
    outcome = engine.perform_activity("skydive")
    assert outcome.code == "invalid_input"
    assert engine.state == before


def test_activity_when_dead():
    engine = _engine(alive=False)
    assert engine.perform_activity("read").code == "deceased"


def test_activity_not_age_gated():
    engine = _engine(age=1)
    assert engine.perform_activity("study").ok


# ── apply_for_job / quit_job ────────────────────────────────


def test_apply_not_qualified():
    engine = _engine(age=0, money=100, smarts=50)
    outcome = engine.apply_for_job("developer")
    assert not outcome.ok
    assert outcome.code == "not_qualified"
    assert engine.state.job is None
    assert _texts(engine)[-1] == "You failed to qualify for Web Developer."


def test_apply_too_young():
    engine = _engine(age=10)
    outcome = engine.apply_for_job("cashier")
    assert outcome.code == "too_young"
    assert engine.state.job is None
    assert _texts(engine)[-1] == "You are too young for Cashier."


def test_apply_success_grants_first_job():
    engine = _engine(age=20, smarts=70)
    outcome = engine.apply_for_job("developer")
    assert outcome.ok
    assert engine.state.job.id == "developer"
    assert engine.state.job.pay == 1000
    assert "First Job" in outcome.achievements
    assert "You got a job as Web Developer." in _texts(engine)


def test_reapply_overwrites_job():
    engine = _engine(age=20, smarts=70)
    engine.apply_for_job("developer")
    engine.apply_for_job("cashier")
    assert engine.state.job.id == "cashier"


def test_apply_unknown_job():
    engine = _engine(age=20)
    before = engine.state
    assert engine.apply_for_job("astronaut").code == "invalid_input"
    assert engine.state == before


def test_quit_job():
    engine = _engine(age=20, job=Job(id="intern", title="Intern", pay=100))
    assert engine.quit_job().ok
    assert engine.state.job is None
    assert "You quit your job as Intern." in _texts(engine)


def test_quit_when_unemployed():
    assert _engine().quit_job().code == "unemployed"


# ── interact_with_person ────────────────────────────────────


def test_gift_scenario():
    for seed in range(30):
        engine = _engine(random.Random(seed), money=200, people=[_emma(relationship=80)])
        assert engine.interact_with_person("p1", "gift").ok
        state = engine.state
        person = state.people[0]
        assert 200 - 80 <= state.money <= 200 - 5
        assert 84 <= person.relationship <= 90
        assert len(person.history) == 1


def test_gift_closeness_capped(fixed_random):
    engine = _engine(fixed_random(pick="high"), money=200, people=[_emma(relationship=95)])
    engine.interact_with_person("p1", "gift")
    assert engine.state.people[0].relationship == 100


def test_interaction_history_and_log(fixed_random):
    engine = _engine(fixed_random(pick="low"), age=12, people=[_emma()])
    engine.interact_with_person("p1", "talk")
    assert engine.state.people[0].history == ["You had a chat with Emma. (Age 12)"]
    assert _texts(engine)[-1] == "You had a chat with Emma."


def test_insult_clamps_at_zero(fixed_random):
    engine = _engine(fixed_random(pick="high"), happiness=2, people=[_emma(relationship=5)])
    engine.interact_with_person("p1", "insult")
    assert engine.state.people[0].relationship == 0
    assert engine.state.happiness == 0


def test_ask_for_money(fixed_random):
    engine = _engine(fixed_random(value=0.0, pick="high"), money=0, people=[_emma(relationship=60)])
    engine.interact_with_person("p1", "askmoney")
    assert engine.state.money == 200


def test_refusal_is_normal_outcome(fixed_random):
    engine = _engine(fixed_random(value=0.99), people=[_emma(relationship=60)])
    outcome = engine.interact_with_person("p1", "ask-for-money")
    assert outcome.ok
    assert outcome.message == "Emma refused to lend you money."


def test_unknown_person():
    engine = _engine(people=[_emma()])
    before = engine.state
    assert engine.interact_with_person("nope", "talk").code == "invalid_input"
    assert engine.state == before


def test_unknown_action():
    engine = _engine(people=[_emma()])
    assert engine.interact_with_person("p1", "hug").code == "invalid_input"


def test_deceased_person():
    engine = _engine(people=[_emma(alive=False)])
    before = engine.state
    assert engine.interact_with_person("p1", "talk").code == "person_deceased"
    assert engine.state == before


def test_interaction_when_dead():
    engine = _engine(alive=False, people=[_emma()])
    assert engine.interact_with_person("p1", "talk").code == "deceased"


# ── Achievements through operations ─────────────────────────


def test_achievement_survives_state_change():
    engine = _engine(money=10040)
    assert engine.perform_activity("read").achievements == ["Wealthy"]
    engine.perform_activity("party")
    assert engine.state.money < 10000
    assert engine.state.achievements["Wealthy"] is True
    assert _texts(engine).count("Achievement unlocked: Wealthy") == 1


def test_engine_with_empty_registry():
    state = PlayerState(name="Test", age=30, money=20000)
    engine = LifeEngine(state, rng=random.Random(1), achievements={})
    assert engine.perform_activity("read").achievements == []


def test_engine_keeps_registry_snapshot(monkeypatch):
    before = _engine(age=100, achievements={"Age 18": True})
    monkeypatch.setitem(ACHIEVEMENTS, "Centenarian", lambda s, r: s.age >= 100)
    after = _engine(age=100, achievements={"Age 18": True})
    assert before.perform_activity("read").achievements == []
    assert after.perform_activity("read").achievements == ["Centenarian"]


# ── Log cap ─────────────────────────────────────────────────


def test_log_capped():
    engine = _engine(rules=LifeRules(log_cap=5))
    for _ in range(12):
        engine.perform_activity("read")
    assert len(engine.state.log) == 5
    assert engine.state.log[-1].text == "You read and gained smarts."


# ── Session management ──────────────────────────────────────


def test_update_settings():
    engine = _engine()
    assert engine.update_settings(theme="light").ok
    assert engine.state.settings == Settings(theme="light", autosave=True)
    assert engine.update_settings(autosave=False).ok
    assert engine.state.settings == Settings(theme="light", autosave=False)


def test_update_settings_invalid_theme():
    engine = _engine()
    assert engine.update_settings(theme="neon").code == "invalid_input"
    assert engine.state.settings.theme == "dark"


def test_settings_change_allowed_when_dead():
    assert _engine(alive=False).update_settings(theme="light").ok


def test_new_life():
    engine = _engine(age=70, alive=False, settings=Settings(theme="light"))
    outcome = engine.new_life("Nova")
    assert outcome.ok
    state = engine.state
    assert state.name == "Nova"
    assert state.age == 0
    assert state.alive is True
    assert state.settings.theme == "light"
    assert _texts(engine) == ["You were born."]
    assert [p.relation for p in state.people][:2] == ["parent", "parent"]


def test_new_life_random_name():
    engine = _engine()
    engine.new_life()
    assert engine.state.name in engine.catalog.names


def test_load_record():
    engine = _engine()
    outcome = engine.load({"name": "Loaded", "age": 40, "money": 5})
    assert outcome.ok
    assert engine.state.name == "Loaded"
    assert engine.state.age == 40
    assert engine.state.happiness == 60


def test_load_failure_keeps_state():
    engine = _engine(age=12)
    before = engine.state
    outcome = engine.load(["not", "a", "record"])
    assert outcome.code == "codec_failure"
    assert engine.state == before


def test_import_failure_keeps_state():
    engine = _engine(age=12)
    before = engine.state
    assert engine.import_text("{broken").code == "codec_failure"
    assert engine.import_text('{"age": "old"}').code == "codec_failure"
    assert engine.state == before


def test_import_oversized_input_reported():
    engine = _engine(age=12)
    before = engine.state
    assert engine.import_text('{"money": 1' + "0" * 5000 + "}").code == "codec_failure"
    assert engine.import_text("[" * 200000 + "]" * 200000).code == "codec_failure"
    assert engine.state == before


def test_load_trims_log_to_cap():
    engine = _engine(rules=LifeRules(log_cap=3))
    engine.load({"log": [{"text": f"entry {i}"} for i in range(10)]})
    assert [e.text for e in engine.state.log] == ["entry 7", "entry 8", "entry 9"]


def test_export_import_roundtrip_same_behaviour():
    original = LifeEngine(rng=random.Random(21))
    for _ in range(20):
        original.advance_year()
    text = original.export_text()

    a = LifeEngine(codec.loads(text), rng=random.Random(99))
    b = LifeEngine(PlayerState(name="Placeholder"), rng=random.Random(99))
    assert b.import_text(text).ok

    for _ in range(25):
        a.advance_year()
        b.advance_year()
        person_id = a.state.people[0].id
        a.interact_with_person(person_id, "gift")
        b.interact_with_person(person_id, "gift")
    assert a.state.model_dump(exclude={"log"}) == b.state.model_dump(exclude={"log"})
    assert _texts(a) == _texts(b)
