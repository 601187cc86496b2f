"""Time-windowed invocation control: clocks, schedulers, throttle, debounce."""
