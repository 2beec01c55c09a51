from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field


@dataclass
class RuntimeStats:
    started_at: float = field(default_factory=time.time)
    events_dispatched: int = 0
    stage_failures: int = 0
    messages_logged: int = 0
    log_failures: int = 0
    messages_deleted: int = 0
    delete_failures: int = 0
    commands_added: int = 0
    commands_served: int = 0
    replies_sent: int = 0
    replies_failed: int = 0
    fetches_ok: int = 0
    fetches_failed: int = 0

    def uptime_seconds(self) -> int:
        return int(time.time() - self.started_at)

    def summary(self) -> dict[str, int]:
        data = asdict(self)
        data.pop("started_at")
        data["uptime_seconds"] = self.uptime_seconds()
        return data
