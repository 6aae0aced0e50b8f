#!/usr/bin/env python3
"""Run the battery observer against a simulated sensor fleet.

Every sensor is an in-memory fake: reads take ``--read-delay`` seconds,
fail with probability ``--fail-rate``, and a random subset is marked as
downloading on each check.  Observer events are printed as JSON lines.

Usage
-----
::

    python scripts/simulate_fleet.py --sensors 5 --interval 2 --duration 10

Options::

    --sensors N          Number of simulated sensors (default: 4)
    --interval SECONDS   Poll interval (default: 5)
    --duration SECONDS   How long to keep polling (default: 15)
    --read-delay SECONDS Simulated read latency (default: 0.2)
    --fail-rate RATIO    Probability a read raises (default: 0.2)
    --busy-rate RATIO    Probability a sensor is downloading (default: 0.1)
    --mqtt               Also publish events to the configured MQTT broker
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from battery_observer import (  # noqa: E402
    BatteryObserver,
    DeviceInfo,
    DeviceReadError,
    ObserverConfig,
    ObserverEvent,
    Sensor,
    SensorNotFoundError,
)


class SimulatedDirectory:
    def __init__(self, count: int) -> None:
        self.sensors = {
            f"sensor-{i}": Sensor(id=f"sensor-{i}", mac_address=f"DE:AD:BE:EF:00:{i:02X}") for i in range(1, count + 1)
        }
        self.levels: dict[str, Any] = {}

    async def get_all(self) -> Sequence[Sensor]:
        return list(self.sensors.values())

    async def get_by_id(self, sensor_id: str) -> Sensor:
        try:
            return self.sensors[sensor_id]
        except KeyError:
            raise SensorNotFoundError(sensor_id) from None

    async def update(self, sensor_id: str, field: str, value: Any) -> None:
        self.levels[sensor_id] = value


class SimulatedDevices:
    def __init__(self, read_delay: float, fail_rate: float) -> None:
        self._read_delay = read_delay
        self._fail_rate = fail_rate

    async def get_info_with_retries(
        self,
        mac_address: str,
        max_retries: int,
        options: Mapping[str, Any] | None,
    ) -> DeviceInfo:
        for _attempt in range(max_retries):
            await asyncio.sleep(self._read_delay)
            if random.random() >= self._fail_rate:
                return DeviceInfo(battery_level=str(random.randint(5, 100)))
        if random.random() < 0.5:
            return DeviceInfo(battery_level=None)
        raise DeviceReadError(f"Could not connect to {mac_address}", mac_address=mac_address)


class SimulatedDownloads:
    def __init__(self, busy_rate: float) -> None:
        self._busy_rate = busy_rate

    def is_busy(self, sensor_id: str) -> bool:
        return random.random() < self._busy_rate


def _print_event(event: ObserverEvent) -> None:
    print(event.model_dump_json(exclude_none=True), flush=True)


async def main() -> None:
    parser = argparse.ArgumentParser(description="Run the battery observer against simulated sensors.")
    parser.add_argument("--sensors", type=int, default=4, help="Number of simulated sensors")
    parser.add_argument("--interval", type=float, default=5.0, help="Poll interval in seconds")
    parser.add_argument("--duration", type=float, default=15.0, help="Seconds to keep polling")
    parser.add_argument("--read-delay", type=float, default=0.2, help="Simulated read latency")
    parser.add_argument("--fail-rate", type=float, default=0.2, help="Probability a read attempt fails")
    parser.add_argument("--busy-rate", type=float, default=0.1, help="Probability a sensor is downloading")
    parser.add_argument("--mqtt", action="store_true", help="Publish events to MQTT (BATTERY_OBSERVER_MQTT_*)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = ObserverConfig.from_env(poll_interval=args.interval, mqtt_enabled=args.mqtt)
    directory = SimulatedDirectory(args.sensors)
    observer = BatteryObserver(
        directory,
        SimulatedDevices(args.read_delay, args.fail_rate),
        SimulatedDownloads(args.busy_rate),
        config=config,
    )

    async with observer:
        observer.subscribe(_print_event)
        observer.start()
        await asyncio.sleep(args.duration)
        observer.stop()
        await observer.wait_idle()

    for sensor_id, level in sorted(directory.levels.items()):
        print(f"{sensor_id}: {level}%", file=sys.stderr)


if __name__ == "__main__":
    asyncio.run(main())
