import pytest
from PySide6.QtCore import QCoreApplication, QSettings

from autonation.content.config import PlayerType
from autonation.content.specs import DelegationSettings
from autonation.game.delegation_manager import DelegationManager
from autonation.gui.delegation_settings import DelegationSettingsBridge, DelegationSettingsStore
from fake_world import FakeGame


@pytest.fixture(scope="module")
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def store(qapp, tmp_path):
    settings = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return DelegationSettingsStore(settings)


def _manager():
    game = FakeGame()
    game.add_player("h1", player_type=PlayerType.HUMAN)
    manager = DelegationManager(game, "game-1")
    manager.init()
    return manager


def test_defaults_when_nothing_saved(store):
    assert store.load() == DelegationSettings(enabled=False, gold_reserve=500_000)


def test_saved_values_are_read_back(store):
    store.save(DelegationSettings(enabled=True, gold_reserve=3_000_000))

    assert store.load() == DelegationSettings(enabled=True, gold_reserve=3_000_000)
    assert store.settings.value("settings/buildingDelegation") == "true"


def test_garbage_reserve_falls_back_to_default(store):
    store.settings.setValue("settings/buildingDelegationReserve", "lots")

    assert store.load().gold_reserve == 500_000


def test_toggle_persists_and_emits(store):
    bridge = DelegationSettingsBridge(store)
    received = []
    bridge.delegation_changed.connect(lambda enabled, reserve: received.append((enabled, reserve)))

    assert bridge.toggle() is True
    bridge.set_reserve(1_250_000)

    assert received == [(True, 500_000), (True, 1_250_000)]
    assert store.load() == DelegationSettings(enabled=True, gold_reserve=1_250_000)


def test_negative_reserve_clamped(store):
    bridge = DelegationSettingsBridge(store)

    bridge.set_reserve(-10)

    assert bridge.settings().gold_reserve == 0


def test_attach_pushes_current_values_then_follows_changes(store):
    store.save(DelegationSettings(enabled=True, gold_reserve=800_000))
    bridge = DelegationSettingsBridge(store)
    manager = _manager()

    bridge.attach(manager)
    delegation = manager.get_delegation("h1")
    assert (delegation.enabled, delegation.gold_reserve) == (True, 800_000)

    bridge.set_enabled(False)
    bridge.set_reserve(5_000_000_000)
    assert (delegation.enabled, delegation.gold_reserve) == (False, 5_000_000_000)
