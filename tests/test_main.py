'''
    File Name: test_main.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
import pytest

import main
from database.gateway import SqliteGateway
from database.snapshot import load_store


@pytest.fixture
def db_args(tmp_path):
    return ["--db", str(tmp_path / "cli.db")]


def test_income_and_expense_are_persisted(db_args, tmp_path, capsys):
    assert main.main(db_args + ["income", "100", "-d", "paycheck"]) == 0
    assert main.main(db_args + ["expense", "20", "-d", "coffee", "-c", "Food"]) == 0
    out = capsys.readouterr().out
    assert "Balance: $80.00" in out

    store = load_store(SqliteGateway(tmp_path / "cli.db"))
    assert [t.description for t in store.get_ledger()] == ["coffee", "paycheck"]
    assert store.get_balance() == 80


def test_invalid_amount_exit_code(db_args, tmp_path, capsys):
    assert main.main(db_args + ["expense", "-5"]) == 2
    assert "Invalid amount" in capsys.readouterr().err
    assert load_store(SqliteGateway(tmp_path / "cli.db")).get_ledger() == ()


def test_quick_expense(db_args, capsys):
    assert main.main(db_args + ["quick", "10", "-c", "Transport"]) == 0
    assert "Quick expense $10" in capsys.readouterr().out


def test_quick_rejects_non_preset(db_args):
    with pytest.raises(SystemExit):
        main.main(db_args + ["quick", "7"])


def test_summary_lists_window(db_args, capsys):
    main.main(db_args + ["income", "50"])
    capsys.readouterr()
    assert main.main(db_args + ["summary", "--days", "7"]) == 0
    out = capsys.readouterr().out
    assert "Balance: $50.00" in out
    assert "last 7 days" in out
    assert out.count(" spent ") == 7
    assert "Money added" in out


def test_history_and_export(db_args, tmp_path, capsys):
    assert main.main(db_args + ["history"]) == 0
    assert "No transactions yet" in capsys.readouterr().out

    main.main(db_args + ["expense", "12.5", "-d", "lunch"])
    csv_path = tmp_path / "history.csv"
    assert main.main(db_args + ["export", str(csv_path)]) == 0
    assert csv_path.read_text(encoding="utf-8").splitlines()[0] == "id,date,description,type,category,amount"
    assert main.main(db_args + ["history", "-n", "1"]) == 0
    assert "lunch" in capsys.readouterr().out
