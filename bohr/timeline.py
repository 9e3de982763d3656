"""Orbit animation timelines for Bohr diagrams.

Every populated orbit gets its own Timeline that carries the orbit's
electrons around its path forever. Electrons on the same orbit are staggered
by ``duration / k`` so they stay evenly spaced, and each timeline is seeked
forward by one full duration as soon as it is built so the electrons are
already spread out on first paint.

Key classes:
- TimelineState: Lifecycle states of a timeline.
- Timeline: Playhead, duration, direction and stagger for one orbit.
- AnimationScheduler: Builds seeked timelines with randomized speed and direction.
- FrameTicker: Cooperative asyncio loop that advances live timelines.
"""

from __future__ import annotations

import asyncio
import enum
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from .geometry import ORIGIN, Circle, OrbitGeometry, OrbitPath

MIN_DURATION = 6.0
MAX_DURATION = 15.0


class TimelineState(enum.Enum):
    CONSTRUCTED = "constructed"
    PLAYING = "playing"
    KILLED = "killed"


@dataclass(eq=False)
class Timeline:
    """Looping animation of one orbit's electrons.

    Attributes:
        path: Orbit path the electrons travel along.
        electrons: Electron placeholders owned by this timeline.
        duration: Seconds for one full revolution.
        reversed: True to travel counter-clockwise.
        time: Playhead position in seconds.
        state: Current lifecycle state.
    """

    path: OrbitPath
    electrons: list[Circle]
    duration: float
    reversed: bool = False
    time: float = 0.0
    state: TimelineState = TimelineState.CONSTRUCTED

    def __post_init__(self):
        if not self.electrons:
            raise ValueError("A timeline needs at least one electron")
        if self.duration <= 0:
            raise ValueError(f"Timeline duration must be > 0, got {self.duration}")

    @property
    def orbit_index(self) -> int:
        return self.path.index

    @property
    def stagger(self) -> float:
        """Delay between the start of consecutive electrons."""
        return self.duration / len(self.electrons)

    @property
    def repeat(self) -> int:
        # -1 means repeat forever
        return -1

    @property
    def is_active(self) -> bool:
        return self.state is TimelineState.PLAYING

    def start_time(self, position: int) -> float:
        """Return when the electron at ``position`` starts moving."""
        return position * self.stagger

    def begin_offset(self, position: int) -> float:
        """Return the electron's start time relative to the current playhead.

        Negative values mean the electron is already under way, which is how
        the initial seek is expressed in SVG ``begin`` attributes.
        """
        return self.start_time(position) - self.time

    def seek(self, time: float) -> Timeline:
        """Move the playhead to ``time`` and start playing.

        Seeking a killed timeline has no effect.
        """
        if self.state is TimelineState.KILLED:
            return self
        self.time = max(time, 0.0)
        self.state = TimelineState.PLAYING
        return self

    def advance(self, delta: float) -> None:
        """Move the playhead forward; ignored unless the timeline is playing."""
        if self.state is not TimelineState.PLAYING:
            return
        self.time += delta

    def kill(self) -> None:
        self.state = TimelineState.KILLED

    def progress(self, position: int) -> float | None:
        """Return how far the electron has travelled in its current loop.

        Returns:
            Value in [0, 1), or None if the electron has not started yet.
        """
        elapsed = self.time - self.start_time(position)
        if elapsed < 0:
            return None
        return (elapsed / self.duration) % 1.0

    def fraction(self, position: int) -> float | None:
        """Return the electron's traversal fraction along the orbit path."""
        progress = self.progress(position)
        if progress is None:
            return None
        if self.reversed:
            return (1.0 - progress) % 1.0
        return progress

    def phases(self) -> list[float | None]:
        return [self.fraction(i) for i in range(len(self.electrons))]

    def positions(self) -> list[tuple[float, float]]:
        """Return each electron's point; electrons not yet started sit at the origin."""
        points = []
        for position in range(len(self.electrons)):
            fraction = self.fraction(position)
            points.append(ORIGIN if fraction is None else self.path.point_at(fraction))
        return points


class AnimationScheduler:
    """Builds orbit timelines with randomized duration and direction.

    The random source is injected so a fixed seed gives reproducible
    diagrams. For each orbit the duration is drawn first, then the direction.

    Attributes:
        rng: Random source.
        min_duration: Shortest revolution time in seconds.
        max_duration: Longest revolution time in seconds.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        min_duration: float = MIN_DURATION,
        max_duration: float = MAX_DURATION,
    ):
        if min_duration <= 0:
            raise ValueError("min_duration must be > 0")
        if min_duration > max_duration:
            raise ValueError(
                f"min_duration ({min_duration}) exceeds max_duration ({max_duration})"
            )
        self.rng = rng or random.Random()
        self.min_duration = min_duration
        self.max_duration = max_duration

    def schedule(self, orbit: OrbitGeometry) -> Timeline:
        """Build a timeline for one orbit and seek it by one full duration."""
        duration = self.rng.uniform(self.min_duration, self.max_duration)
        reverse = self.rng.random() < 0.5
        timeline = Timeline(
            path=orbit.path,
            electrons=list(orbit.electrons),
            duration=duration,
            reversed=reverse,
        )
        return timeline.seek(timeline.duration)

    def schedule_all(self, orbits: Iterable[OrbitGeometry]) -> list[Timeline]:
        return [self.schedule(orbit) for orbit in orbits if orbit.electrons]


@dataclass
class FrameTicker:
    """Cooperative frame loop that advances every live timeline.

    Stands in for the host's animation-frame scheduler when diagrams are
    driven from Python. Killed timelines are dropped on the next tick.

    Attributes:
        timelines: Timelines currently driven by this ticker.
        elapsed: Total seconds ticked so far.
    """

    timelines: list[Timeline] = field(default_factory=list)
    elapsed: float = 0.0
    _stopped: bool = field(default=False, repr=False)

    def add(self, timelines: Iterable[Timeline]) -> None:
        for timeline in timelines:
            if timeline not in self.timelines:
                self.timelines.append(timeline)

    def prune(self) -> None:
        self.timelines = [t for t in self.timelines if t.state is not TimelineState.KILLED]

    def tick(self, delta: float) -> None:
        """Advance every playing timeline by ``delta`` seconds."""
        self.prune()
        for timeline in self.timelines:
            timeline.advance(delta)
        self.elapsed += delta

    def stop(self) -> None:
        self._stopped = True

    async def run(
        self,
        fps: float = 60.0,
        frames: int | None = None,
        on_frame: Callable[[FrameTicker], None] | None = None,
    ) -> None:
        """Tick at ``fps`` until ``frames`` ticks have run or stop() is called.

        Args:
            fps: Frames per second; each tick advances by ``1 / fps``.
            frames: Number of frames to run, or None to run until stopped.
            on_frame: Optional callback invoked after every tick.
        """
        if fps <= 0:
            raise ValueError("fps must be > 0")
        interval = 1.0 / fps
        self._stopped = False
        count = 0
        while not self._stopped and (frames is None or count < frames):
            await asyncio.sleep(interval)
            self.tick(interval)
            count += 1
            if on_frame is not None:
                on_frame(self)
