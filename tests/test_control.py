# tests/test_control.py
import pytest

from core.interfaces import Observation, UP, LEFT, RIGHT
from core.grid import is_chain
from bot.actions import RecordingSink
from bot.control import SnakeBot, BotHooks
from bot.scheduler import ManualScheduler

class TeeSink(RecordingSink):
    """Records moves and forwards them to the host."""
    def __init__(self, host):
        super().__init__()
        self.host = host

    def emit(self, move):
        super().emit(move)
        self.host.key_down(move.key)

def make_bot(host, hooks=None):
    sched = ManualScheduler()
    sink = TeeSink(host)
    bot = SnakeBot(host.cfg, host, sink, sched, hooks=hooks)
    return bot, sched, sink

def drive(host, sched, frames):
    for _ in range(frames):
        host.advance_frame()
        if not sched.step():
            break

def record_observations(bot):
    seen = []
    observe = bot.perception.observe
    def wrapped(pixels, score, ctx, width=None):
        result = observe(pixels, score, ctx, width)
        if isinstance(result, Observation):
            seen.append((score, result))
        return result
    bot.perception.observe = wrapped
    return seen

def test_start_is_idempotent(numpy_host):
    bot, sched, _ = make_bot(numpy_host())
    bot.start()
    bot.start()
    assert bot.running
    assert sched.has_pending
    bot.stop()
    sched.step()
    assert not sched.has_pending

def test_first_tick_starts_game_and_dispatches(numpy_host):
    host = numpy_host(frames_per_step=1)
    bot, sched, sink = make_bot(host)
    bot.start()
    drive(host, sched, 1)
    assert host.is_playing()
    assert len(sink.moves) == 1
    move = sink.moves[0]
    assert bot.command_pending
    assert bot.expected_head == (host.cfg.start_cell[0] + move.dx, host.cfg.start_cell[1] + move.dy)

def test_pending_command_blocks_further_dispatch(numpy_host):
    host = numpy_host(frames_per_step=50)
    bot, sched, sink = make_bot(host)
    bot.start()
    drive(host, sched, 5)   # the game has not stepped yet
    assert len(sink.moves) == 1
    assert bot.command_pending

def test_confirmed_moves_keep_in_sync(numpy_host):
    host = numpy_host(frames_per_step=1)
    bot, sched, sink = make_bot(host)
    bot.start()
    drive(host, sched, 12)
    assert bot.running
    assert bot.stats.desyncs == 0
    assert bot.stats.perception_failures == 0
    assert len(sink.moves) >= 10

def test_blank_frame_is_extrapolated(numpy_host):
    host = numpy_host(frames_per_step=1)
    bot, sched, _ = make_bot(host)
    bot.start()
    drive(host, sched, 4)
    host.renderer.blank = True
    drive(host, sched, 1)
    assert bot.stats.extrapolations == 1
    assert bot.prev_snake[0] == host.rules.snake[0]
    host.renderer.blank = False
    drive(host, sched, 3)
    assert bot.stats.desyncs == 0
    assert bot.running

def test_failure_without_history_takes_no_action(numpy_host):
    host = numpy_host(frames_per_step=1)
    host.renderer.blank = True
    bot, sched, sink = make_bot(host)
    bot.start()
    drive(host, sched, 3)
    assert sink.moves == []
    assert bot.stats.perception_failures == 3
    assert bot.running

def test_desync_discards_plan(numpy_host):
    host = numpy_host(frames_per_step=1000)
    bot, sched, _ = make_bot(host)
    bot.start()
    drive(host, sched, 1)
    stale = [UP] * 5
    bot.prev_head = (0, 0)
    bot.expected_head = (1, 0)
    bot.command_pending = True
    bot.plan = stale
    drive(host, sched, 1)
    assert bot.stats.desyncs == 1
    assert bot.plan is not stale
    assert bot.prev_head == host.rules.snake[0]

def test_reversal_is_not_dispatched(numpy_host):
    host = numpy_host()
    bot, _, sink = make_bot(host)
    bot.last_body_length = 3
    bot.current_dir = (1, 0)
    assert not bot.send_direction(LEFT)
    assert bot.stats.refused_reversals == 1
    assert sink.moves == []
    assert bot.send_direction(RIGHT)
    assert sink.moves == [RIGHT]

def test_single_cell_snake_may_reverse(numpy_host):
    bot, _, sink = make_bot(numpy_host())
    bot.last_body_length = 1
    bot.current_dir = (1, 0)
    assert bot.send_direction(LEFT)

def test_error_in_tick_stops_loop(numpy_host):
    host = numpy_host()
    bot, sched, _ = make_bot(host)

    def boom():
        raise RuntimeError("bad frame")
    host.read_pixels = boom
    bot.start()
    drive(host, sched, 3)
    assert not bot.running
    assert isinstance(bot.last_error, RuntimeError)
    assert not sched.has_pending

def test_game_over_is_reported_and_restarted(numpy_host):
    host = numpy_host(frames_per_step=1)
    ended = []
    bot, sched, _ = make_bot(host, hooks=BotHooks(on_game_end=lambda g, s: ended.append((g, s))))
    bot.start()
    drive(host, sched, 2)
    host.rules.score = 3
    host._finish(host.rules.snapshot())
    assert host.game_over_overlay_active()
    drive(host, sched, 1)
    assert len(ended) == 1
    game, summary = ended[0]
    assert game == 0 and summary["final_score"] == 3
    assert "plans_food" in summary
    assert host.is_playing()
    assert bot.games_finished == 1

def test_bot_eats_and_bodies_match_score(numpy_host):
    host = numpy_host(frames_per_step=2)
    bot, sched, _ = make_bot(host)
    seen = record_observations(bot)
    bot.start()
    drive(host, sched, 1500)
    assert bot.last_error is None
    assert seen
    for score, obs in seen:
        assert len(obs.body) == score + 1
        assert is_chain(obs.body)
    best = max(score for score, _ in seen)
    assert best >= 1

def test_bot_on_pygame_frames(cfg):
    from core.game_host import SnakeGameHost
    from viz.renderer_pygame import PygameRenderer
    c = cfg.with_(frames_per_step=2)
    renderer = PygameRenderer()
    renderer.open(c, headless=True)
    host = SnakeGameHost(c, renderer)
    bot, sched, _ = make_bot(host)
    seen = record_observations(bot)
    bot.start()
    drive(host, sched, 400)
    assert bot.last_error is None
    assert seen
    for score, obs in seen:
        assert len(obs.body) == score + 1
        assert is_chain(obs.body)
    assert bot.stats.ticks > 0
