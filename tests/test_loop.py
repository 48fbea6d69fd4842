import pytest

from skidodge.config.settings import GameSettings
from skidodge.core.errors import InvalidConfiguration
from skidodge.core.events import EventBus, EventType
from skidodge.core.state import State
from skidodge.game.loop import GameLoop
from skidodge.game.scoring import OutcomeKind
from skidodge.input.controller import InputController, Intent

from conftest import ScriptedRandom


def make_loop(canvas, scheduler, score_sink, status_sink, rng=None, event_bus=None, **overrides):
    settings = GameSettings(**{"spawn_rate": 0.0, **overrides})
    controller = InputController(speed=settings.player_speed)
    loop = GameLoop(
        surface=canvas,
        input_controller=controller,
        scheduler=scheduler,
        score_sink=score_sink,
        status_sink=status_sink,
        settings=settings,
        rng=rng or ScriptedRandom(default=0.0),
        event_bus=event_bus,
    )
    return loop, controller


def run_frames(scheduler, limit=500):
    frames = 0
    while scheduler.pending and frames < limit:
        scheduler.run_pending()
        frames += 1
    return frames


def test_start_sets_up_session(canvas, scheduler, score_sink, status_sink):
    loop, _ = make_loop(canvas, scheduler, score_sink, status_sink)
    assert loop.state == State.IDLE

    assert loop.start() is True
    assert loop.state == State.RUNNING
    assert loop.is_running
    assert loop.grid.total_rows == 8
    assert (loop.player.x, loop.player.y) == (0, 0)
    assert score_sink.text == "Score: 0"
    assert scheduler.pending == 1


def test_start_twice_is_rejected(canvas, scheduler, score_sink, status_sink):
    loop, _ = make_loop(canvas, scheduler, score_sink, status_sink)
    loop.start()
    assert loop.start() is False
    assert scheduler.pending == 1


def test_start_rejects_bad_columns(canvas, scheduler, score_sink, status_sink):
    loop, _ = make_loop(canvas, scheduler, score_sink, status_sink, total_cols=1)
    with pytest.raises(InvalidConfiguration):
        loop.start()


def test_tick_reschedules_one_frame(canvas, scheduler, score_sink, status_sink):
    loop, _ = make_loop(canvas, scheduler, score_sink, status_sink)
    loop.start()
    scheduler.run_pending()
    scheduler.run_pending()
    assert loop.frame_count == 2
    assert scheduler.pending == 1


def test_zero_obstacle_waves_keep_running(canvas, scheduler, score_sink, status_sink):
    loop, _ = make_loop(
        canvas, scheduler, score_sink, status_sink,
        rng=ScriptedRandom(default=0.0), spawn_rate=1.0,
    )
    loop.start()
    run_frames(scheduler, limit=30)

    assert len(loop.obstacles) == 0
    assert loop.is_running
    assert loop.last_outcome.kind == OutcomeKind.NO_EVENT


def test_input_moves_player(canvas, scheduler, score_sink, status_sink):
    loop, controller = make_loop(canvas, scheduler, score_sink, status_sink, player_speed=2.0)
    loop.start()
    controller.on_key_down("right")
    controller.on_key_down("down")
    for _ in range(10):
        scheduler.run_pending()

    assert loop.player.x > 0
    assert loop.player.y > 0


def test_collision_stops_loop(canvas, scheduler, score_sink, status_sink):
    bus = EventBus()
    # Initial wave: one obstacle in column 0, straight below the player
    loop, _ = make_loop(
        canvas, scheduler, score_sink, status_sink,
        rng=ScriptedRandom([0.3], columns=[0]), event_bus=bus,
        obstacle_speed=70.0,
    )
    loop.start()
    frames = run_frames(scheduler)

    assert frames == 8
    assert loop.state == State.STOPPED
    assert not loop.is_running
    assert loop.last_outcome.kind == OutcomeKind.COLLIDED
    assert status_sink.text == "Game over! Final score: 0"
    assert scheduler.pending == 0
    assert [e.data["score"] for e in bus.get_history(EventType.GAME_OVER)] == [0]


def test_passing_wave_scores(canvas, scheduler, score_sink, status_sink):
    bus = EventBus()
    loop, _ = make_loop(
        canvas, scheduler, score_sink, status_sink,
        rng=ScriptedRandom([0.3], columns=[0]), event_bus=bus,
        obstacle_speed=50.0, start_col=5,
    )
    loop.start()
    for _ in range(12):
        scheduler.run_pending()

    assert loop.score == 1
    assert score_sink.text == "Score: 1"
    assert len(bus.get_history(EventType.SCORE_CHANGED)) == 1

    for _ in range(20):
        scheduler.run_pending()
    assert loop.score == 1
    assert loop.is_running


def test_stop_cancels_pending_tick(canvas, scheduler, score_sink, status_sink):
    loop, _ = make_loop(canvas, scheduler, score_sink, status_sink)
    loop.start()
    loop.stop()

    assert loop.state == State.STOPPED
    assert scheduler.pending == 0
    assert status_sink.text == "Stopped"


def test_stale_tick_is_a_no_op(canvas, scheduler, score_sink, status_sink):
    loop, _ = make_loop(canvas, scheduler, score_sink, status_sink)
    loop.start()
    loop.stop()

    assert loop.tick() is None
    assert loop.frame_count == 0
    assert scheduler.pending == 0


def test_stopped_session_cannot_restart(canvas, scheduler, score_sink, status_sink):
    loop, _ = make_loop(canvas, scheduler, score_sink, status_sink)
    loop.start()
    loop.stop()
    assert loop.start() is False
    assert loop.state == State.STOPPED


def test_debug_grid_draws_lines(canvas, scheduler, score_sink, status_sink):
    loop, _ = make_loop(canvas, scheduler, score_sink, status_sink, debug_grid=True)
    loop.start()
    scheduler.run_pending()

    buffer = canvas.get_buffer()
    # Right edge of the last cell of the first row
    assert tuple(buffer[30, 699]) == (220, 60, 60)


def test_start_rejects_spawn_rate_outside_unit_range(canvas, scheduler, score_sink, status_sink):
    loop, _ = make_loop(canvas, scheduler, score_sink, status_sink)
    loop.settings.spawn_rate = 7.0
    with pytest.raises(InvalidConfiguration):
        loop.start()
    assert loop.state == State.IDLE
    assert scheduler.pending == 0


def test_session_keeps_its_own_settings(canvas, scheduler, score_sink, status_sink):
    settings = GameSettings(spawn_rate=0.0)
    loop = GameLoop(
        surface=canvas,
        input_controller=InputController(),
        scheduler=scheduler,
        score_sink=score_sink,
        status_sink=status_sink,
        settings=settings,
        rng=ScriptedRandom(default=0.0),
    )
    loop.start()
    settings.debug_grid = True
    scheduler.run_pending()

    assert loop.settings.debug_grid is False
    assert tuple(canvas.get_buffer()[30, 699]) != (220, 60, 60)


def test_key_intent_uses_player_speed(canvas, scheduler, score_sink, status_sink):
    controller = InputController(speed=1.0)
    loop = GameLoop(
        surface=canvas,
        input_controller=controller,
        scheduler=scheduler,
        score_sink=score_sink,
        status_sink=status_sink,
        settings=GameSettings(spawn_rate=0.0, player_speed=2.5),
        rng=ScriptedRandom(default=0.0),
    )
    controller.on_key_down("right")
    loop.start()

    assert loop.player.speed == 2.5
    assert controller.current_intent() == Intent(2.5, 0)
    scheduler.run_pending()
    assert loop.player.x == 2.5
