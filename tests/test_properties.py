"""Property-based tests for core invariants."""

from __future__ import annotations

import io
import json
import uuid
from contextlib import redirect_stdout
from pathlib import Path

from hypothesis import given, settings, strategies as st

import kirei_cli
from kirei_store.config_store import ConfigStore
from schemas.config_schemas import Config
from schemas.issue_schemas import ProviderId

names = st.text(min_size=1, max_size=40).filter(lambda value: value.strip() == value and bool(value))
tokens = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789_", min_size=1, max_size=24)


def _workspace_store(name: str) -> ConfigStore:
    base = Path(".tmp") / name / uuid.uuid4().hex
    return ConfigStore(config_dir=base)


def _run(argv, store: ConfigStore) -> str:
    buffer = io.StringIO()
    with redirect_stdout(buffer):
        code = kirei_cli.main(argv, store=store)
    assert code == 0
    return buffer.getvalue()


@settings(max_examples=50, deadline=None)
@given(name=names)
def test_property_init_then_show_displays_name(name: str) -> None:
    store = _workspace_store("prop-init-show")
    _run(["init", f"--user-name={name}"], store)
    shown = json.loads(_run(["config", "show"], store))
    assert shown["user_name"] == name


@settings(max_examples=50, deadline=None)
@given(stored=st.one_of(st.none(), names), override=names)
def test_property_greet_override_takes_precedence(stored, override: str) -> None:
    store = _workspace_store("prop-greet")
    if stored is not None:
        store.save(Config(user_name=stored))
    assert _run(["greet", f"--user-name={override}"], store) == f"Hello, {override}!\n"


@settings(max_examples=25, deadline=None)
@given(st.lists(st.sampled_from(["greet", "init", "show"]), max_size=4))
def test_property_config_path_independent_of_history(history) -> None:
    store = _workspace_store("prop-path")
    expected = _run(["config", "path"], store)
    for command in history:
        if command == "init":
            _run(["init", "--user-name=Ada"], store)
        elif command == "show":
            _run(["config", "show"], store)
        else:
            _run(["greet"], store)
    assert _run(["config", "path"], store) == expected


@settings(max_examples=50, deadline=None)
@given(
    name=st.one_of(st.none(), names),
    provider=st.sampled_from(list(ProviderId)),
    stored_tokens=st.dictionaries(st.sampled_from(list(ProviderId)), tokens, max_size=4),
)
def test_property_save_of_load_is_idempotent(name, provider, stored_tokens) -> None:
    store = _workspace_store("prop-idempotent")
    config = Config(user_name=name)
    config.unified.default_provider = provider
    config.unified.tokens.update(stored_tokens)
    store.save(config)
    before = store.path().read_bytes()

    store.save(store.load())

    assert store.path().read_bytes() == before
