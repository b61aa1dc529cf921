"""Test cases for setting immutability (locks)."""

import pytest

from treeconf import ImmutableSettingError, Setting


def test_locked_setting_rejects_implicit_overwrite():
    """Test a locked value cannot be overwritten without an explicit lock.

    Given a setting assigned with lock=True
    When assigning a new value without lock
    Then ImmutableSettingError names the setting and the value is kept
    """
    settings = Setting()
    settings.config(opt=1, lock=True)

    with pytest.raises(ImmutableSettingError, match="<opt> setting is immutable"):
        settings.config(opt=2)
    assert settings.opt == 1

    with pytest.raises(ImmutableSettingError):
        settings.opt = 2
    with pytest.raises(ImmutableSettingError):
        settings["opt"] = 2


def test_explicit_lock_overrides_stored_lock():
    """Test an explicit lock in the same call allows the overwrite.

    Given a locked setting
    When assigning with lock=False, then without lock
    Then both assignments succeed and the lock is released
    """
    settings = Setting()
    settings.config(opt=1, lock=True)

    settings.config(opt=2, lock=False)
    assert settings.opt == 2
    settings.config(opt=3)
    assert settings.opt == 3


def test_relock_in_same_call():
    """Test relocking while changing the value, then further writes."""
    settings = Setting()
    settings.int(opt=1, lock=False)
    settings.config(opt=3)

    settings.config(opt=2, lock=True)
    settings.config(opt=3, lock=False)
    settings.config(opt=10)
    assert settings.opt == 10

    settings.config(opt=4, lock=True)
    with pytest.raises(ImmutableSettingError):
        settings.config(opt=5)
    assert settings.lock_schema() == {"opt": True}


def test_locked_declaration_accepts_first_value():
    """Test a locked slot without a value can be filled once."""
    settings = Setting()
    settings.int("opt", lock=True)

    settings.config(opt=1)
    assert settings.opt == 1
    with pytest.raises(ImmutableSettingError):
        settings.config(opt=2)


def test_redeclaring_locked_setting_keeps_value():
    """Test a declaration-only call on a locked setting keeps value and lock."""
    settings = Setting()
    settings.config(opt=1, lock=True)
    settings.config("opt")

    assert settings.opt == 1
    assert settings.lock_schema() == {"opt": True}


def test_locked_scalar_cannot_become_namespace():
    """Test configure() on a locked scalar raises."""
    settings = Setting()
    settings.config(opt=1, lock=True)

    with pytest.raises(ImmutableSettingError):
        settings.configure("opt")


def test_unlocked_scalar_becomes_namespace():
    """Test configure() on an unlocked scalar replaces it with a child node."""
    settings = Setting()
    settings.config(opt=1, type="int")
    settings.configure("opt", lambda node: node.config(inner=True))

    assert settings.to_dict() == {"opt": {"inner": True}}
    assert settings.type_schema() == {"opt": {"inner": "any"}}
    assert settings.lock_schema() == {"opt": {"inner": False}}
