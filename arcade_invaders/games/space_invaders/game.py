"""
Space Invaders Game Core - Pure game logic implementing GameInterface.
Frame-driven: one update() per rendered frame, no drawing or audio playback here.
"""

import logging
import random
from typing import List, Optional, Dict, Any, Set

from ...core.audio_interface import AudioInterface, NullAudio, SoundEvent
from ...core.clock import Clock, MonotonicClock
from ...core.game_interface import GameInterface, GameMetadata, GameState, InputSignals
from .collision import overlaps
from .config import SpaceInvadersConfig
from .entities import BonusTarget, Cannon, Projectile, ProjectileOwner, Shield
from .formation import Formation
from .spawning import SpawnPolicy

logger = logging.getLogger(__name__)


class SpaceInvadersGame(GameInterface):
    """
    Core Space Invaders game logic implementing GameInterface.

    The player controls a cannon at the bottom of the arena, shooting at a
    formation of invaders that marches sideways and drops a row each time it
    touches an edge. Shields erode block by block and a bonus target crosses
    the top of the arena now and then.

    Randomness and time are injected so a session can be replayed exactly.
    """

    @classmethod
    def get_metadata(cls) -> GameMetadata:
        """Return metadata about Space Invaders game."""
        return GameMetadata(
            name="Space Invaders",
            id="space_invaders",
            description="Classic arcade shooter - destroy alien invaders before they reach Earth",
            version="1.0.0",
            min_players=1,
            max_players=1,
            supports_human=True,
        )

    def __init__(
        self,
        config: Optional[SpaceInvadersConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        audio: Optional[AudioInterface] = None,
    ):
        """
        Initialize the game in the START state.

        Args:
            config: Game configuration (arena size, speeds, timing gates)
            rng: Random source for shooter choice and bonus target behaviour
            clock: Callable returning milliseconds, used by every timing gate
            audio: Audio collaborator notified of game events
        """
        self.config = config or SpaceInvadersConfig()
        self.width = self.config.width
        self.height = self.config.height

        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.clock: Clock = clock if clock is not None else MonotonicClock()
        self.audio: AudioInterface = audio if audio is not None else NullAudio()
        self.spawn_policy = SpawnPolicy(self.config, self.rng)

        self.state: GameState = GameState.START
        self.events: List[str] = []

        # Session state (initialized in _new_session)
        self.cannon: Cannon
        self.formation: Formation
        self.projectiles: List[Projectile] = []
        self.shields: List[Shield] = []
        self.bonus: BonusTarget
        self.score: int = 0
        self.wave: int = 1
        self.frame_count: int = 0

        self._new_session()

    def _new_session(self) -> None:
        """Rebuild every entity for wave 1 with a fresh score."""
        cfg = self.config
        self.cannon = Cannon(
            x=self.width / 2 - cfg.cannon_width / 2,
            y=self.height - cfg.cannon_bottom_offset,
            arena_width=self.width,
            width=cfg.cannon_width,
            height=cfg.cannon_height,
            speed=cfg.cannon_speed,
            lives=cfg.start_lives,
            margin=cfg.edge_margin,
        )
        self.score = 0
        self.wave = 1
        self.frame_count = 0
        self.formation = Formation(cfg, wave=1)
        self.projectiles = []
        self._create_shields()
        self.bonus = BonusTarget(
            x=-cfg.bonus_width,
            y=cfg.bonus_y,
            width=cfg.bonus_width,
            height=cfg.bonus_height,
            speed=cfg.bonus_speed,
        )
        self.spawn_policy.reset()

    def _create_shields(self) -> None:
        """Space the shields evenly across the arena above the cannon."""
        cfg = self.config
        spacing = self.width / (cfg.shield_count + 1)
        half_width = cfg.shield_block_size * 4
        shield_y = self.height - cfg.shield_bottom_offset
        self.shields = [
            Shield(x=spacing * (i + 1) - half_width, y=shield_y, block_size=cfg.shield_block_size)
            for i in range(cfg.shield_count)
        ]

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def reset(self) -> Dict[str, Any]:
        """
        Start a new run from wave 1 and enter PLAYING.

        Returns:
            Dictionary containing the initial game state
        """
        self.events = []
        if self.bonus.active:
            self._emit(SoundEvent.BONUS_LOOP_STOP)
        self._new_session()
        self.state = GameState.PLAYING
        logger.info("New game started")
        return self.get_state()

    def update(self, signals: InputSignals) -> Dict[str, Any]:
        """
        Execute one simulation tick.

        Outside PLAYING the only thing that happens is the start/restart
        trigger; that tick performs the reset and nothing else.

        Args:
            signals: Logical action states for this tick

        Returns:
            Game state after the tick
        """
        self.events = []

        if self.state != GameState.PLAYING:
            if signals.start:
                return self.reset()
            return self.get_state()

        self.frame_count += 1
        now = self.clock()

        self._apply_input(signals)
        self._update_formation(now)
        if self.state != GameState.PLAYING:
            return self.get_state()

        self._update_projectiles()
        self._update_bonus(now)
        self._resolve_collisions()

        return self.get_state()

    def _game_over(self, reason: str) -> None:
        self.state = GameState.GAME_OVER
        self.bonus.deactivate()
        self._emit(SoundEvent.BONUS_LOOP_STOP)
        self._emit(SoundEvent.GAME_OVER)
        logger.info("Game over (%s): score=%d wave=%d", reason, self.score, self.wave)

    def _emit(self, event: SoundEvent, pitch: float = 1.0) -> None:
        """Record an event and pass it to the audio collaborator, best effort."""
        self.events.append(event.value)
        try:
            self.audio.handle(event, pitch)
        except Exception:
            logger.warning("Audio backend failed on %s", event.value, exc_info=True)

    # ------------------------------------------------------------------
    # Tick phases
    # ------------------------------------------------------------------

    @property
    def player_projectile(self) -> Optional[Projectile]:
        for proj in self.projectiles:
            if proj.is_player:
                return proj
        return None

    def _apply_input(self, signals: InputSignals) -> None:
        if signals.move_left:
            self.cannon.move_left()
        if signals.move_right:
            self.cannon.move_right()
        if signals.fire:
            self._fire_player()

    def _fire_player(self) -> None:
        """Fire if the cannon is able and no player shot is in flight."""
        if not self.cannon.can_fire or self.player_projectile is not None:
            return

        x, y = self.cannon.muzzle()
        self.projectiles.append(Projectile(
            x=x,
            y=y,
            owner=ProjectileOwner.PLAYER,
            speed=-self.config.player_projectile_speed,
            width=self.config.projectile_width,
            height=self.config.projectile_height,
        ))
        self._emit(SoundEvent.PLAYER_SHOT)

    def _update_formation(self, now: float) -> None:
        """March, check invasion, animate, let invaders shoot, advance waves."""
        if self.formation.is_cleared():
            self._start_next_wave()
            return

        if self.formation.advance() and self.formation.reached_row(self.cannon.y):
            self._game_over("invaders reached the cannon")
            return

        if self.frame_count % self.config.animation_interval_ticks == 0:
            self.formation.toggle_animation()
            if self.spawn_policy.step_sound_due(now, self.wave):
                self._emit(SoundEvent.INVADER_STEP, self.formation.step_pitch())

        shot = self.spawn_policy.try_enemy_fire(now, self.formation)
        if shot is not None:
            self.projectiles.append(shot)

    def _start_next_wave(self) -> None:
        self.wave += 1
        self.formation = Formation(self.config, wave=self.wave)
        self.projectiles = []
        logger.info("Wave %d begins (speed %.2f)", self.wave, self.formation.speed)

    def _update_projectiles(self) -> None:
        for proj in self.projectiles:
            proj.advance()
        self.projectiles = [p for p in self.projectiles if not p.is_off_arena(self.height)]

    def _update_bonus(self, now: float) -> None:
        if self.spawn_policy.try_spawn_bonus(now, self.bonus):
            logger.debug("Bonus target launched heading %+d", self.bonus.direction)
            self._emit(SoundEvent.BONUS_LOOP_START)

        if self.bonus.active:
            self.bonus.advance(self.width)
            if not self.bonus.active:
                self._emit(SoundEvent.BONUS_LOOP_STOP)

    # ------------------------------------------------------------------
    # Collisions
    # ------------------------------------------------------------------

    def _resolve_collisions(self) -> None:
        """
        Resolve every hit on this tick's positions.

        Spent projectiles are only marked during the scans; the projectile
        list is rebuilt once at the end.
        """
        spent: Set[int] = set()

        for index, proj in enumerate(self.projectiles):
            if proj.is_player:
                if self._player_projectile_hits_invader(proj) or self._player_projectile_hits_bonus(proj):
                    spent.add(index)
            elif overlaps(proj.bounds(), self.cannon.bounds()):
                spent.add(index)
                self._cannon_hit()

        for index, proj in enumerate(self.projectiles):
            if index in spent:
                continue
            for shield in self.shields:
                if shield.resolve_hit(proj):
                    spent.add(index)
                    break

        if spent:
            self.projectiles = [p for i, p in enumerate(self.projectiles) if i not in spent]

        if self.cannon.lives <= 0:
            self._game_over("no lives left")

    def _player_projectile_hits_invader(self, proj: Projectile) -> bool:
        """First alive invader overlapping the shot dies; one kill per shot."""
        proj_bounds = proj.bounds()
        for inv in self.formation.invaders:
            if inv.alive and overlaps(proj_bounds, inv.bounds()):
                inv.alive = False
                self.score += inv.points
                self._emit(SoundEvent.INVADER_HIT)
                return True
        return False

    def _player_projectile_hits_bonus(self, proj: Projectile) -> bool:
        if not self.bonus.active or not overlaps(proj.bounds(), self.bonus.bounds()):
            return False

        points = self.spawn_policy.roll_bonus_points()
        self.bonus.deactivate()
        self.score += points
        self._emit(SoundEvent.BONUS_LOOP_STOP)
        self._emit(SoundEvent.BONUS_HIT)
        logger.debug("Bonus target destroyed for %d points", points)
        return True

    def _cannon_hit(self) -> None:
        self.cannon.lives = max(0, self.cannon.lives - 1)
        self._emit(SoundEvent.PLAYER_HIT)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    @property
    def lives(self) -> int:
        return self.cannon.lives

    @property
    def invader_direction(self) -> int:
        return self.formation.direction

    def get_state(self) -> Dict[str, Any]:
        """Get current game state for rendering."""
        return {
            "state": self.state.value,
            "cannon": self.cannon.to_dict(),
            "invaders": [inv.to_dict() for inv in self.formation.invaders],
            "invader_direction": self.formation.direction,
            "invader_speed": self.formation.speed,
            "projectiles": [p.to_dict() for p in self.projectiles],
            "shields": [s.to_dict() for s in self.shields],
            "bonus": self.bonus.to_dict(),
            "score": self.score,
            "lives": self.cannon.lives,
            "wave": self.wave,
            "frame": self.frame_count,
            "width": self.width,
            "height": self.height,
            "invaders_alive": self.formation.alive_count,
            "total_invaders": self.config.total_invaders,
            "events": list(self.events),
        }

    def get_score(self) -> int:
        """Get current game score."""
        return self.score
