"""Payment orchestration across the rates, transactions and bank services."""

from __future__ import annotations

import logging
from typing import Protocol

from paygate.contract import (
    ChooseBankClientRequest,
    CreateTransactionRequest,
    GetTransactionResponse,
    PayRequest,
    PayResponse,
    PayStatus,
    PayStatusRequest,
    UpdateTransactionRequest,
)

logger = logging.getLogger(__name__)


class BankClient(Protocol):
    bank_name: str

    async def pay(self, req: PayRequest) -> PayStatus: ...

    async def pay_status(self, req: PayStatusRequest) -> PayStatus: ...


class RatesClientProtocol(Protocol):
    async def choose_bank_client(self, req: ChooseBankClientRequest) -> BankClient: ...

    def get_bank_client_by_name(self, bank_name: str) -> BankClient: ...


class TransactionsClientProtocol(Protocol):
    async def get(self, pay_id: str) -> GetTransactionResponse: ...

    async def create(self, req: CreateTransactionRequest) -> str: ...

    async def update(self, req: UpdateTransactionRequest) -> None: ...


class ServiceError(Exception):
    """Raised when a payment operation cannot be completed."""


_FINAL_STATUSES = frozenset({PayStatus.SUCCESS, PayStatus.FAIL})


class PaymentService:
    """Routes payments to the cheapest bank and keeps transaction records in step."""

    def __init__(
        self,
        rates_client: RatesClientProtocol,
        transactions_client: TransactionsClientProtocol,
    ) -> None:
        self._rates = rates_client
        self._transactions = transactions_client

    async def pay(self, req: PayRequest) -> PayResponse:
        """Record a new transaction, pay through the chosen bank and store the outcome."""
        try:
            bank = await self._rates.choose_bank_client(ChooseBankClientRequest(req.currency_code))
        except Exception as exc:
            raise ServiceError(f"ratesClient.ChooseBankClient error: {exc}") from exc

        try:
            pay_id = await self._transactions.create(
                CreateTransactionRequest(
                    amount=req.amount,
                    currency_code=req.currency_code,
                    bank_name=bank.bank_name,
                    status=PayStatus.NEW,
                )
            )
        except Exception as exc:
            raise ServiceError(f"transactionsClient.Create error: {exc}") from exc

        try:
            status = await bank.pay(req)
        except Exception as exc:
            await self._update_quietly(pay_id, PayStatus.FAIL)
            raise ServiceError(f"bankClient.Pay error: {exc}") from exc

        await self._update_quietly(pay_id, status)
        return PayResponse(pay_id=pay_id, status=status)

    async def pay_status(self, req: PayStatusRequest) -> PayStatus:
        """Return the payment's status, asking the bank while it is not final."""
        try:
            transaction = await self._transactions.get(req.pay_id)
        except Exception as exc:
            raise ServiceError(f"payID: {req.pay_id}, transactionsClient.Get error: {exc}") from exc
        if transaction.status in _FINAL_STATUSES:
            return transaction.status

        try:
            bank = self._rates.get_bank_client_by_name(transaction.bank_name)
        except Exception as exc:
            raise ServiceError(f"ratesClient.GetBankClientByName error: {exc}") from exc

        try:
            bank_status = await bank.pay_status(req)
        except Exception as exc:
            logger.info("payID: %s, bankClient.PayStatus error: %s", req.pay_id, exc)
            return transaction.status

        if bank_status != transaction.status:
            await self._update_quietly(req.pay_id, bank_status)
        return bank_status

    async def _update_quietly(self, pay_id: str, status: PayStatus) -> None:
        try:
            await self._transactions.update(UpdateTransactionRequest(status=status, pay_id=pay_id))
        except Exception as exc:
            logger.info("payID: %s, transactionsClient.Update error: %s", pay_id, exc)