"""
Unit tests for ConfigActionService.

Tests cover:
- Every action with form-style string parameters
- Parse and validation failures reported as failed results
- Unknown actions
"""

from decimal import Decimal

import pytest

from stonks.domain.models import TransactionType
from stonks.services import ConfigActionService


class TestDispatch:
    """Tests for action dispatch."""

    def test_update_settings(self, config_action_service: ConfigActionService, ledger_service):
        result = config_action_service.dispatch(
            "update_settings", {"portfolio_name": "Retirement", "cash_amount": "2500.75"}
        )

        assert result.success is True
        assert result.error is None
        assert ledger_service.get_portfolio_name() == "Retirement"
        assert ledger_service.get_cash_amount() == Decimal("2500.75")

    def test_update_settings_bad_cash(self, config_action_service: ConfigActionService, ledger_service):
        """
        GIVEN a valid name and a non-numeric cash amount
        WHEN settings are updated
        THEN the action fails and the name is not written either
        """
        result = config_action_service.dispatch(
            "update_settings", {"portfolio_name": "Retirement", "cash_amount": "abc"}
        )

        assert result.success is False
        assert "cash_amount" in result.error
        assert ledger_service.get_portfolio_name() == "My Portfolio"

    def test_add_holding_with_empty_target(self, config_action_service: ConfigActionService, ledger_service):
        """
        GIVEN an add_holding form with an empty target weight
        WHEN dispatched
        THEN the holding is stored without a target
        """
        result = config_action_service.dispatch(
            "add_holding", {"name": "Vanguard", "code": "BATS:VOO", "target_weight": ""}
        )

        [holding] = ledger_service.list_holdings()
        assert result.success is True
        assert holding.target_weight is None

    def test_update_holding(self, config_action_service: ConfigActionService, holding_factory, ledger_service):
        holding = holding_factory("BATS:VOO")

        result = config_action_service.dispatch(
            "update_holding",
            {"holding_id": str(holding.id), "name": "S&P", "code": "BATS:VOO", "target_weight": "45.5"},
        )

        assert result.success is True
        assert ledger_service.list_holdings()[0].target_weight == Decimal("45.5")

    def test_update_missing_holding(self, config_action_service: ConfigActionService):
        result = config_action_service.dispatch(
            "update_holding", {"holding_id": "42", "name": "S&P", "code": "BATS:VOO"}
        )

        assert result.success is False
        assert "not found" in result.error

    def test_delete_and_toggle_holding(self, config_action_service: ConfigActionService, holding_factory, ledger_service):
        holding = holding_factory("BATS:VOO")

        toggled = config_action_service.dispatch("toggle_visibility", {"holding_id": holding.id})
        deleted = config_action_service.dispatch("delete_holding", {"holding_id": holding.id})
        again = config_action_service.dispatch("delete_holding", {"holding_id": holding.id})

        assert toggled.success is True
        assert deleted.success is True
        assert again.success is False
        assert ledger_service.list_holdings() == []

    def test_add_transaction_fee_defaults_to_zero(self, config_action_service: ConfigActionService, ledger_service):
        result = config_action_service.dispatch(
            "add_transaction",
            {"code": "BATS:VOO", "type": "buy", "date": "2024-03-01", "quantity": "10", "value": "4850.5"},
        )

        [txn] = ledger_service.list_transactions()
        assert result.success is True
        assert txn.txn_type == TransactionType.BUY
        assert txn.fee == Decimal("0")
        assert txn.gross_value == Decimal("4850.5")

    @pytest.mark.parametrize(
        "params",
        [
            {"code": "BATS:VOO", "type": "buy", "date": "not a date", "quantity": "1", "value": "1"},
            {"code": "BATS:VOO", "type": "buy", "date": "", "quantity": "1", "value": "1"},
            {"code": "BATS:VOO", "type": "swap", "date": "2024-03-01", "quantity": "1", "value": "1"},
            {"code": "BATS:VOO", "type": "buy", "date": "2024-03-01", "quantity": "ten", "value": "1"},
            {"code": "BATS:VOO", "type": "buy", "date": "2024-03-01", "quantity": "1"},
        ],
    )
    def test_add_transaction_rejected(self, config_action_service: ConfigActionService, ledger_service, params):
        result = config_action_service.dispatch("add_transaction", params)

        assert result.success is False
        assert result.error
        assert ledger_service.list_transactions() == []

    def test_delete_transaction(self, config_action_service: ConfigActionService, transaction_factory):
        txn = transaction_factory("BATS:VOO", TransactionType.BUY, Decimal("1"), Decimal("100"))

        result = config_action_service.dispatch("delete_transaction", {"transaction_id": str(txn.id)})

        assert result.success is True

    def test_bad_id(self, config_action_service: ConfigActionService):
        result = config_action_service.dispatch("delete_transaction", {"transaction_id": "abc"})

        assert result.success is False
        assert "transaction_id" in result.error

    @pytest.mark.parametrize("action", ["drop_database", "", None])
    def test_unknown_action(self, config_action_service: ConfigActionService, action):
        result = config_action_service.dispatch(action, {})

        assert result.success is False
        assert result.error.startswith("Invalid action")

    def test_actions_listing(self, config_action_service: ConfigActionService):
        assert config_action_service.actions == [
            "add_holding",
            "add_transaction",
            "delete_holding",
            "delete_transaction",
            "toggle_visibility",
            "update_holding",
            "update_settings",
        ]
