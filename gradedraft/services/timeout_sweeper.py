import asyncio
import logging

from gradedraft.exceptions import DraftError
from gradedraft.services.draft_controller import utcnow

logger = logging.getLogger(__name__)


class TimeoutSweeper:
    """Background task that auto-picks for turn holders who ran out of time.

    Every ``interval`` seconds all live drafts are scanned; a turn older than
    the league's per-pick limit plus ``grace`` seconds is auto-picked through
    the controller, which re-validates the turn before touching anything.
    """

    def __init__(self, store, controller, interval=10.0, grace=5.0, clock=None):
        self.store = store
        self.controller = controller
        self.interval = interval
        self.grace = grace
        self.clock = clock or utcnow
        self._task = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def expired(self, league, now) -> bool:
        state = league.draft_state
        if not state.current_turn_user_id or not state.current_turn_start_time:
            return False
        elapsed = (now - state.current_turn_start_time).total_seconds()
        return elapsed > league.draft_settings.time_limit_per_pick + self.grace

    async def sweep_once(self):
        results = []
        now = self.clock()

        for league in self.store.drafting_leagues():
            if not self.expired(league, now):
                continue

            user_id = league.draft_state.current_turn_user_id
            elapsed = (now - league.draft_state.current_turn_start_time).total_seconds()
            logger.info(
                "Turn expired for league %s, user %s, elapsed: %ds",
                league.league_id,
                user_id,
                elapsed,
            )
            try:
                results.append(await self.controller.auto_pick(league.league_id, user_id))
            except DraftError as exc:
                # league moved on or the user is mid-pick; next sweep re-checks
                logger.info(
                    "Skipped auto-pick for league %s: %s (%s)", league.league_id, exc.kind, exc
                )
            except Exception:
                logger.exception("Error auto-picking for league %s", league.league_id)

        return results

    async def _run(self):
        while True:
            try:
                await self.sweep_once()
            except Exception:
                logger.exception("Error checking expired turns")
            await asyncio.sleep(self.interval)

    def start(self):
        if self.running:
            logger.info("Draft timer service is already running")
            return
        logger.info("Starting draft timer service (every %ss, grace %ss)", self.interval, self.grace)
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self):
        if not self.running:
            logger.info("Draft timer service is not running")
            return
        logger.info("Stopping draft timer service...")
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
