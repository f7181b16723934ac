from job_platform.services.presence import PresenceRegistry


def test_register_and_lookup():
    presence = PresenceRegistry()
    presence.register("emp-1", "chan-1")

    assert presence.lookup("emp-1") == "chan-1"
    assert "emp-1" in presence
    assert len(presence) == 1


def test_lookup_unknown_employer_is_none():
    assert PresenceRegistry().lookup("nobody") is None


def test_last_registration_wins():
    presence = PresenceRegistry()
    presence.register("emp-1", "chan-1")
    presence.register("emp-1", "chan-2")

    assert presence.lookup("emp-1") == "chan-2"
    # The old channel no longer owns the employer
    assert presence.unregister("chan-1") == []
    assert presence.lookup("emp-1") == "chan-2"


def test_unregister_removes_only_that_channel():
    presence = PresenceRegistry()
    presence.register("emp-1", "chan-1")
    presence.register("emp-2", "chan-2")

    assert presence.unregister("chan-1") == ["emp-1"]
    assert presence.lookup("emp-1") is None
    assert presence.lookup("emp-2") == "chan-2"
    assert len(presence) == 1


def test_one_channel_claiming_several_employers():
    presence = PresenceRegistry()
    presence.register("emp-1", "chan-1")
    presence.register("emp-2", "chan-1")

    assert presence.unregister("chan-1") == ["emp-1", "emp-2"]
    assert len(presence) == 0


def test_unregister_unknown_channel_is_noop():
    presence = PresenceRegistry()
    presence.register("emp-1", "chan-1")

    assert presence.unregister("chan-x") == []
    assert presence.lookup("emp-1") == "chan-1"
