"""Simulated bank clients that answer after a delay with a random outcome."""

from __future__ import annotations

import asyncio
import random

from paygate.contract import PayRequest, PayStatus, PayStatusRequest

FAST_BANK_NAME = "FastBank"
SLOW_BANK_NAME = "SlowBank"
FAST_BANK_DELAY = 5.0
SLOW_BANK_DELAY = 29.0

_ERROR_OUTCOME = 3


class BankError(Exception):
    """Raised when the simulated bank fails to process a request."""


class SimulatedBankClient:
    """A bank that waits ``delay`` seconds and then returns a random status."""

    def __init__(self, name: str, delay: float, rng: random.Random | None = None) -> None:
        self.bank_name = name
        self.delay = delay
        self._rng = rng if rng is not None else random.Random()

    async def pay(self, req: PayRequest) -> PayStatus:
        await asyncio.sleep(self.delay)
        return self._random_outcome()

    async def pay_status(self, req: PayStatusRequest) -> PayStatus:
        await asyncio.sleep(self.delay)
        return self._random_outcome()

    def _random_outcome(self) -> PayStatus:
        outcome = self._rng.randrange(4)
        if outcome == _ERROR_OUTCOME:
            raise BankError("random bank error")
        return PayStatus(outcome)


def new_fast_bank(delay: float = FAST_BANK_DELAY, rng: random.Random | None = None) -> SimulatedBankClient:
    return SimulatedBankClient(FAST_BANK_NAME, delay, rng)


def new_slow_bank(delay: float = SLOW_BANK_DELAY, rng: random.Random | None = None) -> SimulatedBankClient:
    return SimulatedBankClient(SLOW_BANK_NAME, delay, rng)