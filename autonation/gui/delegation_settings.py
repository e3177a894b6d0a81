from PySide6.QtCore import QObject, QSettings, Signal

from autonation.content.config import (
    SETTING_DELEGATION_ENABLED,
    SETTING_DELEGATION_RESERVE,
    SETTINGS_GROUP,
)
from autonation.content.constants import DEFAULT_DELEGATION_RESERVE
from autonation.content.specs import DelegationSettings

ORGANIZATION = "autonation"
APPLICATION = "autonation"


def _parse_bool(raw) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


def _parse_reserve(raw) -> int:
    try:
        value = int(str(raw).strip())
    except ValueError:
        return DEFAULT_DELEGATION_RESERVE
    return max(0, value)


class DelegationSettingsStore:
    """Persists the building-delegation toggle and reserve between sessions."""

    def __init__(self, settings: QSettings | None = None):
        self.settings = settings if settings is not None else QSettings(ORGANIZATION, APPLICATION)

    def _key(self, name):
        return f"{SETTINGS_GROUP}/{name}"

    def load(self) -> DelegationSettings:
        enabled_raw = self.settings.value(self._key(SETTING_DELEGATION_ENABLED), None)
        reserve_raw = self.settings.value(self._key(SETTING_DELEGATION_RESERVE), None)
        return DelegationSettings(
            enabled=_parse_bool(enabled_raw) if enabled_raw is not None else False,
            gold_reserve=_parse_reserve(reserve_raw) if reserve_raw is not None else DEFAULT_DELEGATION_RESERVE,
        )

    def save(self, settings: DelegationSettings):
        self.settings.setValue(self._key(SETTING_DELEGATION_ENABLED), "true" if settings.enabled else "false")
        self.settings.setValue(self._key(SETTING_DELEGATION_RESERVE), str(int(settings.gold_reserve)))
        self.settings.sync()


class DelegationSettingsBridge(QObject):
    """
    Carries delegation settings from the UI side into the simulation.
    Every change is persisted and re-emitted as delegation_changed(enabled, gold_reserve).
    """
    delegation_changed = Signal(bool, object)

    def __init__(self, store: DelegationSettingsStore | None = None):
        super().__init__()
        self.store = store if store is not None else DelegationSettingsStore()
        self._settings = self.store.load()

    def settings(self) -> DelegationSettings:
        return DelegationSettings(self._settings.enabled, self._settings.gold_reserve)

    def toggle(self) -> bool:
        self._settings.enabled = not self._settings.enabled
        self._publish()
        return self._settings.enabled

    def set_enabled(self, enabled: bool):
        self._settings.enabled = bool(enabled)
        self._publish()

    def set_reserve(self, gold_reserve: int):
        self._settings.gold_reserve = max(0, int(gold_reserve))
        self._publish()

    def attach(self, manager):
        """Routes future changes to manager and pushes the current values once."""
        self.delegation_changed.connect(manager.update_all_from_direct_settings)
        manager.update_all_from_settings(self.settings())

    def _publish(self):
        self.store.save(self._settings)
        self.delegation_changed.emit(self._settings.enabled, self._settings.gold_reserve)
