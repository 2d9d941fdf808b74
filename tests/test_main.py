import pytest

from burrow.components.environment.grid_world import STONE, GridWorld
from burrow.configs.constants.agent import (
    EXIT_INSUFFICIENT_CARGO,
    EXIT_INTERNAL_ERROR,
    EXIT_OK,
    EXIT_RETURN_DECLINED,
)
from burrow.configs.constants.models import TunnelConfig
from burrow.exceptions import InternalInconsistencyError
from burrow.main import MainConfig, main, run_burrow


def _world(**kwargs) -> GridWorld:
    kwargs.setdefault("max_energy", 1e6)
    return GridWorld.filled((15, 9, 15), STONE, base=(7, 4, 7), **kwargs)


@pytest.fixture
def cfg(tmp_path) -> MainConfig:
    config = MainConfig(wall_thickness=1, config_file=str(tmp_path / "none.yaml"))
    config.agent.tunnel.max_edge = 2
    config.agent.maintenance.recharge_poll_s = 1.0
    config.agent.maintenance.restock_poll_s = 1.0
    return config


def test_operator_can_decline_to_start(cfg):
    world = _world()
    questions = []
    code = run_burrow(cfg, hardware=world, confirm=lambda message: questions.append(message) or False)
    assert code == EXIT_OK
    assert questions == ["Shall we begin?"]
    assert world.stats["translate"] == 0


def test_successful_run(cfg):
    world = _world()
    cfg.skip_confirmation = True
    assert run_burrow(cfg, hardware=world, confirm=lambda message: False) == EXIT_OK
    assert world.at_base
    assert world.deposited["stone"] > 0


def test_insufficient_cargo_space(cfg):
    cfg.skip_confirmation = True
    assert run_burrow(cfg, hardware=_world(cargo_slots=2)) == EXIT_INSUFFICIENT_CARGO


def test_declined_risky_return(cfg):
    cfg.skip_confirmation = True
    cfg.agent.tunnel.max_edge = 8
    world = _world(max_energy=8000.0, move_cost=60.0)
    assert run_burrow(cfg, hardware=world, confirm=lambda message: False) == EXIT_RETURN_DECLINED
    assert world.at_base


def test_internal_inconsistency_exit_code(cfg, monkeypatch):
    cfg.skip_confirmation = True

    def broken_run(self, plan):
        raise InternalInconsistencyError("mark mismatch")

    monkeypatch.setattr("burrow.main.TunnelDriver.run", broken_run)
    assert run_burrow(cfg, hardware=_world()) == EXIT_INTERNAL_ERROR


def test_main_applies_yaml_and_runs_the_sim(tmp_path):
    path = tmp_path / "burrow.yaml"
    path.write_text(
        "skip_confirmation: true\n"
        "wall_thickness: 0\n"
        "agent:\n"
        "  tunnel:\n"
        "    max_edge: 1\n"
        "hardware:\n"
        "  size_x: 16\n"
        "  size_y: 16\n"
        "  size_z: 16\n"
        "  ore_density: 0.0\n"
    )
    cfg = MainConfig(config_file=str(path))

    assert main(cfg) == EXIT_OK
    assert cfg.hardware.size_x == 16


def test_unknown_hardware_is_rejected():
    with pytest.raises(ValueError):
        MainConfig(hardware_name="nonexistent")


def test_wall_thickness_reaches_the_spiral_plan(tmp_path):
    cfg = MainConfig(wall_thickness=5, starting_edge=3, starting_steps=4, config_file=str(tmp_path / "none.yaml"))
    cfg.agent.tunnel.max_edge = 6

    plan = cfg.spiral_plan()

    assert (plan.wall_thickness, plan.starting_edge, plan.starting_steps, plan.max_edge) == (5, 3, 4, 6)


def test_tunnel_config_has_no_second_wall_thickness():
    with pytest.raises(TypeError):
        TunnelConfig(wall_thickness=5)
