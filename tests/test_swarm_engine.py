import math

import pytest

import swarm_engine
from swarm_engine import draw_proximity_lines
from swarm_interaction import Mode, OFFSCREEN
from swarm_surface import RecordingSurface


def park(swarm, coords):
    """Pin particles to literal coordinates with no velocity."""
    for p, (x, y) in zip(swarm.particles, coords):
        p.x, p.y, p.vx, p.vy = float(x), float(y), 0.0, 0.0


def count_calls(monkeypatch):
    calls = []
    real = swarm_engine.compute_targets

    def spy(*args, **kwargs):
        calls.append(args)
        return real(*args, **kwargs)

    monkeypatch.setattr(swarm_engine, 'compute_targets', spy)
    return calls


def test_swarm_builds_all_particles_once(make_swarm):
    swarm = make_swarm('classic')
    assert len(swarm.particles) == 900
    assert swarm.mode is Mode.WANDER
    assert all(p.target is None for p in swarm.particles)


def test_tick_clears_then_draws_every_particle(make_swarm, surface):
    swarm = make_swarm(particle_count=40, formation_count=10)
    swarm.tick(surface)
    kinds = [k for k, _ in surface.calls]
    assert kinds[0] == 'clear'
    assert surface.calls[0][1] == (800, 600)
    assert kinds[1:41] == ['circle'] * 40
    assert set(kinds[41:]) <= {'line'}
    assert swarm.frame == 1


def test_pulse_decays_once_per_frame_not_per_particle(make_swarm, surface):
    swarm = make_swarm(particle_count=500)
    swarm.pointer_down(400, 300)
    swarm.tick(surface)
    assert swarm.state.pulse == pytest.approx(180 * 0.92)
    swarm.tick(surface)
    assert swarm.state.pulse == pytest.approx(180 * 0.92 * 0.92)


def test_pointer_events(make_swarm):
    swarm = make_swarm(particle_count=5)
    swarm.pointer_move(10, 20)
    assert swarm.state.pointer == (10.0, 20.0)
    swarm.pointer_up()
    assert swarm.state.pointer == OFFSCREEN


def test_pointer_down_scrambles_for_a_while(make_swarm, clock, surface):
    swarm = make_swarm(particle_count=300)
    swarm.pointer_down(100, 100)
    assert swarm.state.scramble_active
    for p in swarm.particles:
        assert -12 <= p.vx <= 12 and -12 <= p.vy <= 12

    clock.advance(1.0)
    swarm.tick(surface)
    assert swarm.state.scramble_active
    clock.advance(0.25)
    swarm.tick(surface)
    assert not swarm.state.scramble_active


def test_line_drawn_between_close_background_pair(make_swarm, surface):
    swarm = make_swarm(particle_count=2, formation_count=0)
    park(swarm, [(0, 0), (30, 40)])
    assert swarm.tick(surface) == 1
    x1, y1, x2, y2, color, width = surface.lines[0]
    assert (x1, y1, x2, y2) == (0, 0, 30, 40)
    assert color == (186, 85, 211, 38)
    assert width == 0.5


def test_no_line_for_distant_pair(make_swarm, surface):
    swarm = make_swarm(particle_count=2, formation_count=0)
    park(swarm, [(0, 0), (150, 0)])
    assert swarm.tick(surface) == 0
    assert surface.lines == []


def test_no_line_past_cheap_test_but_beyond_distance():
    # |dx| and |dy| both under 100, true distance ~113
    swarm_like = [type('P', (), {'x': 0.0, 'y': 0.0})(), type('P', (), {'x': 80.0, 'y': 80.0})()]
    surface = RecordingSurface()
    assert draw_proximity_lines(swarm_like, 0, 2, 100, surface, 'orchid', 1) == 0


def test_heart_particles_never_get_lines(make_swarm, surface):
    swarm = make_swarm(particle_count=6, formation_count=3)
    park(swarm, [(100, 100)] * 6)
    assert swarm.line_range == (3, 6)
    assert swarm.tick(surface) == 3


def test_line_checks_cap_the_subset(make_swarm, surface):
    swarm = make_swarm(particle_count=20, formation_count=5, line_checks=4)
    park(swarm, [(200, 200)] * 20)
    assert swarm.line_range == (5, 9)
    # C(4, 2)
    assert swarm.tick(surface) == 6


def test_line_range_when_heart_exceeds_swarm(make_swarm):
    swarm = make_swarm(particle_count=10, formation_count=50)
    assert swarm.line_range == (10, 10)


def test_activate_formation_assigns_targets_once(make_swarm, monkeypatch):
    swarm = make_swarm(particle_count=900, formation_count=600)
    calls = count_calls(monkeypatch)
    assert swarm.activate_formation()
    assert swarm.mode is Mode.FORMATION
    assert len(calls) == 1
    assert all(p.target is not None for p in swarm.particles[:600])
    assert all(p.target is None for p in swarm.particles[600:])

    assert not swarm.activate_formation()
    assert len(calls) == 1


def test_resize_in_formation_recomputes_exactly_once(make_swarm, monkeypatch, surface):
    swarm = make_swarm(particle_count=100, formation_count=60)
    swarm.activate_formation()
    calls = count_calls(monkeypatch)
    swarm.resize(1024, 768)
    assert len(calls) == 1
    xs = [p.target[0] for p in swarm.particles[:60]]
    assert 512 - 16 * 768 / 45 - 10 <= min(xs)
    assert max(xs) <= 512 + 16 * 768 / 45 + 10
    swarm.tick(surface)
    assert len(calls) == 1


def test_resize_while_wandering_does_not_compute_targets(make_swarm, monkeypatch):
    swarm = make_swarm(particle_count=20)
    calls = count_calls(monkeypatch)
    swarm.resize(300, 200)
    assert calls == []
    assert swarm.viewport.size == (300, 200)


def test_zero_size_resize_is_survivable(make_swarm, surface):
    swarm = make_swarm(particle_count=50, formation_count=20)
    swarm.activate_formation()
    swarm.resize(0, 0)
    for _ in range(5):
        swarm.tick(surface)
    for p in swarm.particles[:20]:
        assert math.isfinite(p.x) and math.isfinite(p.y)


def test_heart_particles_settle_on_targets(make_swarm, surface):
    swarm = make_swarm(particle_count=40, formation_count=30)
    swarm.activate_formation()
    for _ in range(600):
        swarm.tick(surface)
        surface.reset()
    for p in swarm.particles[:30]:
        tx, ty = p.target
        assert math.hypot(p.x - tx, p.y - ty) < 1.0


def test_background_kept_out_of_heart(make_swarm, surface):
    swarm = make_swarm(particle_count=400, formation_count=100)
    swarm.activate_formation()
    cx, cy = swarm.viewport.center
    limit = swarm.viewport.min_side * 0.38
    for _ in range(30):
        swarm.tick(surface)
        surface.reset()
        for p in swarm.particles[100:]:
            assert math.hypot(p.x - cx, p.y - cy) >= limit - math.hypot(p.vx, p.vy) - 1e-6


def test_invalid_config_is_rejected(make_swarm):
    with pytest.raises(ValueError):
        make_swarm(heart_divisor=-1)


def test_verbose_swarm_logs_transitions(clock, capsys):
    from swarm_config import build_preset
    swarm = swarm_engine.Swarm(build_preset('classic', particle_count=10, formation_count=5),
                               200, 200, clock=clock, seed=1)
    swarm.activate_formation()
    swarm.resize(300, 300)
    out = capsys.readouterr().out
    assert '[SWARM] 10 particles, formation subset 5 (preset=classic' in out
    assert '[SWARM] mode -> FORMATION (5 targets)' in out
    assert '[SWARM] resize 300x300 -> targets recomputed' in out
