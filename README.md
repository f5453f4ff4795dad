# paygate

`paygate` is a small payment gateway made of two HTTP services built on
Starlette and served with uvicorn:

- **gateway** (`paygate.gateway_app`): accepts payments, asks the rates
  service which bank is cheapest for the payment's currency, records the
  payment with a transactions service and sends it to that bank.
- **rates** (`paygate.rates_app`): keeps the rate parameter (banks and
  their rates per currency) in an in-memory cache and picks the bank with
  the lowest rate.

The banks behind the gateway, `FastBank` and `SlowBank`, are simulated
(`paygate.banks`): each waits a fixed delay (5 and 29 seconds) and then
returns a random status (fail, success or pending) or raises
`BankError("random bank error")`.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Running

Start the rates service (port 3001 by default):

```
paygate-rates
```

Options: `--host` (default `0.0.0.0`) and `--port` (default `3001`).

Start the gateway (port 3000 by default):

```
paygate-gateway
```

Options:

| option               | default                      |
|----------------------|------------------------------|
| `--host`             | `0.0.0.0`                    |
| `--port`             | `3000`                       |
| `--rates-url`        | `http://rates:3001`          |
| `--transactions-url` | `http://transactions:3002`   |
| `--timeout`          | `60` (seconds, HTTP client)  |

Both services allow cross-origin requests from any origin and log at
`INFO` level through the standard `logging` module.

## Gateway API

### `POST /pay`

```json
{
  "amount": 100.5,
  "currency_code": 123,
  "pan": "0000",
  "cvv": "000",
  "expired": "01/30"
}
```

Response:

```json
{"pay_id": "1", "status": 1}
```

A body that is not valid JSON or has fields of the wrong type gives `422`.
A failure while choosing a bank, recording the transaction or paying gives
`500` with the error message as plain text. When the bank fails, the
transaction is marked as failed before the error is returned.

### `GET /pay_status/{pay_id}`

Returns the payment's status as a JSON number. A payment that already
succeeded or failed is answered from the transactions service; otherwise
the bank that handled it is asked, and the stored status is updated when
it has changed. If the bank cannot answer, the stored status is returned.

Statuses (`paygate.contract.PayStatus`):

| value | meaning |
|-------|---------|
| 0     | fail    |
| 1     | success |
| 2     | pending |
| 3     | new     |

## Rates API

- `GET /param` returns the current rate parameter exactly as stored.
- `PATCH /param` replaces it; a body that is not a valid parameter gives
  `422`.
- `POST /choose_bank_name` with `{"currency_code": 123}` returns the name
  of the bank with the lowest rate as plain text (the first one wins a
  tie); an unknown currency gives `404`, a currency with no banks gives
  `500`.

The initial parameter:

```json
{
  "rates": {
    "123": [
      {"bank_name": "FastBank", "rate_value": 0.3},
      {"bank_name": "SlowBank", "rate_value": 0.5}
    ],
    "321": [
      {"bank_name": "UnknownBank", "rate_value": 1}
    ]
  }
}
```

The gateway only has clients for `FastBank` and `SlowBank`, so a payment
in currency `321` with this parameter fails with `500`.

## Library use

```python
from paygate.gateway_app import build_service, create_app

service = build_service("http://localhost:3001", "http://localhost:3002", 60)
app = create_app(service)
```

- `paygate.service.PaymentService` does the payment logic given any rates
  and transactions clients; its `pay` and `pay_status` are coroutines and
  raise `ServiceError` on failure.
- `paygate.rates_client.RatesClient` and
  `paygate.transactions_client.TransactionsClient` talk to the two
  services over an `httpx.AsyncClient` and raise
  `paygate.contract.ClientError`.
- `paygate.rates_app.create_app` takes a cache (by default a fresh
  `paygate.cache.InMemoryCache`) and returns the rates application.
- `paygate.rates_server.RatesParameter.from_json` parses a parameter and
  `paygate.rates_server.cheapest_bank_name` picks a bank from it directly.
- `paygate.banks.new_fast_bank` and `new_slow_bank` accept a `delay` and a
  `random.Random` to make the simulated banks fast and repeatable.

## What is not included

- **No transactions service.** The gateway needs one running at
  `--transactions-url`; this package only contains its client. The client
  expects `GET /one/{pay_id}` to return `{"status": ..., "bank_name": ...}`,
  `POST /` with a JSON transaction to answer `200` or `201` with the new
  payment id as the body, and `PATCH /{pay_id}` with `{"status": ...}` to
  answer `200`.
- **No persistent storage.** The rate parameter lives in memory and is
  reset to the initial one when the rates service restarts.
- **No real banks.** Card details are never sent anywhere; the simulated
  banks only sleep and return a random outcome.