from __future__ import annotations
import logging
import random
import string
import time
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple

from devblog.services.debounce import DebounceTimer, Scheduler

logger = logging.getLogger(__name__)

DEFAULT_DOCKERFILE = """FROM node:18-alpine
WORKDIR /app
COPY package.json .
RUN npm install
COPY . .
CMD ["node", "index.js"]"""

CONTAINER_NAMES = (
    "delectable-dodo",
    "unfortunate-pebble",
    "yummy-munchkin",
    "zealous-zebra",
    "happy-hippo",
)

BUILD_DELAY_MS = 2000


@dataclass(frozen=True)
class Image:
    id: str
    name: str = "my-app"
    tag: str = "latest"
    is_building: bool = False

    @property
    def reference(self) -> str:
        return f"{self.name}:{self.tag}"


@dataclass(frozen=True)
class Container:
    id: str
    name: str
    image_id: str
    status: str = "running"  # "running" | "stopped"

    @property
    def is_running(self) -> bool:
        return self.status == "running"


@dataclass(frozen=True)
class DemoState:
    images: Tuple[Image, ...] = ()
    containers: Tuple[Container, ...] = ()
    dockerfile: str = DEFAULT_DOCKERFILE

    @property
    def is_building(self) -> bool:
        return any(img.is_building for img in self.images)

    def image(self, image_id: str) -> Optional[Image]:
        return next((img for img in self.images if img.id == image_id), None)

    def container(self, container_id: str) -> Optional[Container]:
        return next((c for c in self.containers if c.id == container_id), None)


class LifecycleDemo:
    """Pretend image/container lifecycle used to illustrate Docker basics.

    Nothing is executed: builds complete on a timer, ids and container names
    are random. Methods that refuse an action return False.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        build_delay_ms: int = BUILD_DELAY_MS,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._build_timer = DebounceTimer(scheduler, build_delay_ms)
        self._rng = rng or random.Random()
        self._state = DemoState()
        self._listeners: List[Callable[[DemoState], None]] = []

    @property
    def state(self) -> DemoState:
        return self._state

    def subscribe(self, listener: Callable[[DemoState], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dispose(self) -> None:
        self._build_timer.cancel()
        self._listeners.clear()

    def _generate_id(self) -> str:
        alphabet = string.digits + string.ascii_lowercase
        return "".join(self._rng.choice(alphabet) for _ in range(8))

    def _set(self, state: DemoState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    # ---------- Images ----------
    def build(self) -> bool:
        if self._state.is_building:
            return False
        building = Image(id=f"building-{int(time.time() * 1000)}", is_building=True)
        self._set(replace(self._state, images=self._state.images + (building,)))
        self._build_timer.trigger(self.complete_build)
        logger.debug("Simulated build started")
        return True

    def complete_build(self) -> bool:
        if not self._state.is_building:
            return False
        new_id = self._generate_id()
        images = tuple(
            replace(img, id=new_id, is_building=False) if img.is_building else img
            for img in self._state.images
        )
        self._set(replace(self._state, images=images))
        return True

    def delete_image(self, image_id: str) -> bool:
        # An image stays while any container (running or stopped) uses it
        if any(c.image_id == image_id for c in self._state.containers):
            return False
        if self._state.image(image_id) is None:
            return False
        images = tuple(img for img in self._state.images if img.id != image_id)
        self._set(replace(self._state, images=images))
        return True

    # ---------- Containers ----------
    def run_container(self, image_id: str) -> Optional[Container]:
        image = self._state.image(image_id)
        if image is None or image.is_building:
            return None
        container = Container(
            id=self._generate_id(),
            name=self._rng.choice(CONTAINER_NAMES),
            image_id=image_id,
        )
        self._set(replace(self._state, containers=self._state.containers + (container,)))
        return container

    def _set_status(self, container_id: str, status: str) -> bool:
        current = self._state.container(container_id)
        if current is None or current.status == status:
            return False
        containers = tuple(
            replace(c, status=status) if c.id == container_id else c
            for c in self._state.containers
        )
        self._set(replace(self._state, containers=containers))
        return True

    def stop_container(self, container_id: str) -> bool:
        return self._set_status(container_id, "stopped")

    def start_container(self, container_id: str) -> bool:
        return self._set_status(container_id, "running")

    def delete_container(self, container_id: str) -> bool:
        if self._state.container(container_id) is None:
            return False
        containers = tuple(c for c in self._state.containers if c.id != container_id)
        self._set(replace(self._state, containers=containers))
        return True

    def update_dockerfile(self, code: str) -> None:
        self._set(replace(self._state, dockerfile=code))
