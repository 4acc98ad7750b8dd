import asyncio

import httpx

from submarine_client import RequestState, SubmarineClient, load_client_config, setup_logger

setup_logger(level="DEBUG")

# Reads SUBMARINE_SHOP / SUBMARINE_CUSTOMER_ID / SUBMARINE_ENVIRONMENT
config = load_client_config(".env")


def print_outcome(result, errors):
    if errors:
        print("Request failed:", errors)
    else:
        print("Request succeeded:", result)


async def main():
    async with SubmarineClient(config, timeout=httpx.Timeout(30.0)) as client:

        @client.hook(RequestState.FAILED)
        async def on_failed(lifecycle, previous):
            print(f"{lifecycle.operation} failed while {previous.value}")

        subscriptions, errors = await client.get_subscriptions({"status": "active"})
        if errors:
            return errors

        for subscription in subscriptions:
            payment_method = subscription.related("payment_method")
            print(subscription.id, subscription["status"], payment_method and payment_method.get("last4"))

        ids = [subscription.id for subscription in subscriptions]
        await client.bulk_update_subscriptions(ids, {"status": "paused"}, callback=print_outcome)


if __name__ == "__main__":
    asyncio.run(main())
