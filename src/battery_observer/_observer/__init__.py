"""Internal building blocks of :class:`battery_observer.observer.BatteryObserver`.

Owns:
- the bounded-retry battery read
- the busy-sensor gate
- the update queue and its single serial consumer
- the periodic poll cycle
"""
