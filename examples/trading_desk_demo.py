#!/usr/bin/env python3
# -------------------------------------------------------------------------------------------------
#  Copyright (C) 2015-2025 Nautech Systems Pty Ltd. All rights reserved.
#  https://nautechsystems.io
#
#  Licensed under the GNU Lesser General Public License Version 3.0 (the "License");
#  You may not use this file except in compliance with the License.
#  You may obtain a copy of the License at https://www.gnu.org/licenses/lgpl-3.0.en.html
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
# -------------------------------------------------------------------------------------------------
"""
Trading desk wiring demo.

Shows:
- Bundles per desk below a shared root
- Circular singletons wired through lazy fields
- Discardable sessions rebuilt after a discard
- A custom provider for values no bundle manages
"""

from datetime import datetime

from injectree import (
    Configuration,
    Injector,
    MetadataTable,
    ValueResolver,
    initializer,
    inject,
    injectable,
    singleton,
)


configuration = Configuration().configure(strict=False)
metadata = MetadataTable()
injector = Injector(configuration, metadata)


@singleton(injector=injector)
class Clock:
    """Shared by every desk."""

    def now(self) -> str:
        return datetime.now().strftime("%H:%M:%S")


@singleton(injector=injector, domain="desk/fx")
class OrderBook:
    risk = inject("RiskManager")
    clock = inject()

    def __init__(self):
        self.orders = []

    def submit(self, symbol: str, size: float) -> bool:
        if not self.risk.approve(size):
            print(f"  [{self.clock.now()}] rejected {symbol} {size}")
            return False

        self.orders.append((symbol, size))
        print(f"  [{self.clock.now()}] accepted {symbol} {size}")
        return True


@singleton(injector=injector, domain="desk/fx")
class RiskManager:
    book = inject("OrderBook")
    limit = inject("limit", optional=True, default=1_000_000)

    def approve(self, size: float) -> bool:
        exposure = sum(order_size for _, order_size in self.book.orders)
        return exposure + size <= self.limit


@injectable(injector=injector, domain="desk/fx", name="session", singleton=True, discardable=True)
class VenueSession:
    clock = inject(eager=True)

    def __init__(self):
        self.opened_at = None

    @initializer
    def open(self):
        self.opened_at = self.clock.now()
        print(f"  session opened at {self.opened_at}")


def main():
    print("Trading desk wiring demo")
    print("=" * 40)

    container = injector.container("desk/fx")
    container.provider.register("limit", ValueResolver(lambda: 250_000))

    print("1. Circular singletons")
    book = container.provide("OrderBook", resolve=True)
    book.submit("EUR/USD", 100_000)
    book.submit("GBP/USD", 200_000)
    print(f"  book.risk.book is book: {book.risk.book is book}")

    print("2. Discardable session")
    session = container.provide("session", resolve=True)
    container.discard("session")
    reopened = container.provide("session", resolve=True)
    print(f"  rebuilt after discard: {reopened is not session}")

    print("3. Isolated containers")
    other = injector.container("desk/fx")
    print(f"  separate order books: {other.provide('OrderBook', resolve=True) is not book}")


if __name__ == "__main__":
    main()
