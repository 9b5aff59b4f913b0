from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import interfacer.common
from interfacer.common.messaging.bus import MessageId


class SpyBus:
    """
    Records what the global interfacer.common.bus is asked to say.

    The singleton is patched in place, because modules hold on to the
    instance via 'from interfacer.common import bus'.
    """

    def __init__(self):
        self._messages: List[Dict[str, Any]] = []

    def _record(self, level: str, msg_id: MessageId, **kwargs: Any) -> None:
        self._messages.append({"level": level, "id": str(msg_id), "params": kwargs})

    @contextmanager
    def patch(self, monkeypatch: Any):
        real_bus = interfacer.common.bus
        monkeypatch.setattr(real_bus, "_render", self._record)
        # The CLI installs its own renderer on every invocation.
        monkeypatch.setattr(real_bus, "set_renderer", lambda renderer: None)
        yield self

    def get_messages(self) -> List[Dict[str, Any]]:
        return self._messages

    def assert_id_called(self, msg_id: MessageId, level: Optional[str] = None):
        key = str(msg_id)
        for msg in self._messages:
            if msg["id"] == key and (level is None or msg["level"] == level):
                return

        ids_seen = [m["id"] for m in self._messages]
        raise AssertionError(
            f"Message with ID '{key}' was not sent.\nCaptured IDs: {ids_seen}"
        )
