import main
from engine.scenarios import SCENARIOS
from fake_node import PRIVATE_KEYS


def test_list(capsys):
    assert main.main(["--list"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == [s.full_name for s in SCENARIOS]


def test_list_filtered(capsys):
    assert main.main(["--list", "-k", "burnFrom"]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 2


def test_full_run_against_fake_node(clean_env, fake_node, tmp_path):
    clean_env.setenv("EVM_RPC_URL", "http://fake-node:8545")
    config = tmp_path / "config.yaml"
    config.write_text("execution:\n  poll_interval: 0\n")

    assert main.main(["-c", str(config), "--no-delay"]) == 0
    assert fake_node.state.owner == fake_node.accounts[0]


def test_failing_run_exit_code(clean_env, fake_node, tmp_path):
    clean_env.setenv("EVM_RPC_URL", "http://fake-node:8545")
    config = tmp_path / "config.yaml"
    config.write_text("execution:\n  poll_interval: 0\n")
    fake_node.state.owner = fake_node.accounts[3]

    assert main.main(["-c", str(config), "--no-delay", "-k", "mint/mints"]) == 1


def test_full_run_with_private_keys(clean_env, fake_node, tmp_path):
    clean_env.setenv("EVM_RPC_URL", "http://fake-node:8545")
    clean_env.setenv("SIGNER_PRIVATE_KEYS", ",".join(PRIVATE_KEYS))
    config = tmp_path / "config.yaml"
    config.write_text("execution:\n  poll_interval: 0\n")

    assert main.main(["-c", str(config), "--no-delay"]) == 0
    assert "eth_sendRawTransaction" in fake_node.calls
    assert "eth_sendTransaction" not in fake_node.calls
    assert fake_node.state.owner == fake_node.accounts[0]
