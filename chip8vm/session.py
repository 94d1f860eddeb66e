#!/usr/bin/env python3

"""
Emulation Session

The host loop.  Steps the CPU at the chosen clock speed, ticks the delay and
sound timers at 60Hz, and, also at 60Hz, polls host inputs and pushes the
framebuffer to the renderer.  Timers are linked to real time rather than the
instruction count, so the clock speed can be changed (or uncapped) without
affecting the speed of games.

The session ends when the inputs report a quit, when an optional instruction
limit is reached, or when the CPU halts.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED, TIMER_FREQ
from .cpu import CPUError

TIMER_INTERVAL = 1.0 / TIMER_FREQ
DISPLAY_FREQ = 60.0  # 60Hz emulated display refresh
DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ


class Session:
    def __init__(self, cpu, renderer, inputs, clock_speed=None):
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs
        framebuffer = cpu.machine.framebuffer
        self.renderer.set_resolution(*framebuffer.get_vid_size())

        # User can specify 0 for infinite
        auto_clock_speed = DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed
        self.core_interval = None if auto_clock_speed <= 0 else 1.0 / auto_clock_speed

        self.ops = 0
        self.next_timer_tick_time = 0
        self.next_display_update_time = 0
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def run(self, max_ops=None):
        # Returns True if stopped normally, or False if the CPU halted
        cpu = self.cpu
        self.next_timer_tick_time = perf_counter()  # First tick is due straight away

        try:
            while max_ops is None or self.ops < max_ops:
                this_time = perf_counter()  # Do this first for maximum precision

                if self.service_host(this_time):
                    return True

                cpu.step()
                self.ops += 1
                self.perf_counter_ops += 1

                if self.core_interval is not None:
                    # Wait for next CPU instruction.  Do this last for maximum precision (takes into account time spent
                    # on this instruction)
                    next_time = this_time + self.core_interval
                    wait_time = perf_counter()

                    while wait_time < next_time:
                        # Slow clock speeds must not hold up the timers, display or inputs
                        if self.service_host(wait_time):
                            return True

                        wait_time = perf_counter()
        except CPUError as err:
            print(err)
            return False
        finally:
            # Show the final screen, including anything drawn just before a halt
            self.refresh_framebuffer()

        return True

    def service_host(self, this_time):
        # Runs whatever 60Hz host work is due.  Returns True if the inputs asked to quit.
        if this_time >= self.next_perf_report_time:
            self.next_perf_report_time = int(this_time) + 1.0
            self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
            self.perf_counter_ops = 0
            self.perf_counter_fps = 0

        if this_time >= self.next_display_update_time:
            if self.inputs.process_messages():  # Process inputs at 60Hz too, to avoid slowdown
                return True

            self.next_display_update_time = this_time + DISPLAY_INTERVAL
            self.refresh_framebuffer()
            self.perf_counter_fps += 1

        # Catch up on every tick that fell due, so the timers count down in real time even if the host lags
        while this_time >= self.next_timer_tick_time:
            self.next_timer_tick_time += TIMER_INTERVAL
            self.cpu.tick_timers()

        return False

    def refresh_framebuffer(self):
        framebuffer = self.cpu.machine.framebuffer
        self.renderer.refresh_display(framebuffer.to_bytes(), framebuffer.changed)
        framebuffer.changed = False

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)
