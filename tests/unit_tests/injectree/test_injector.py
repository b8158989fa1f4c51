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
Tests for the injector root and the registration decorators.
"""

import pytest

from injectree.config import Configuration
from injectree.container import Container
from injectree.decorators import find_initializers, initializer, injectable, singleton
from injectree.exceptions import ConfigurationError, LookupFailure, RegistrationConflict, ValidationError
from injectree.injection import inject
from injectree.injector import Injector
from injectree.metadata import MetadataTable


class Fixture:
    pass


class AnotherFixture:
    pass


class Starter:
    def start(self):
        pass

    def restart(self):
        pass


class TestInjectorBundles:
    """Test bundle navigation from the root."""

    def setup_method(self):
        """Set up test fixtures."""
        self.injector = Injector(Configuration(), MetadataTable())

    def test_root_bundle(self):
        assert self.injector.bundle() is self.injector.root
        assert self.injector.root.domain == "root"

    def test_bundle_creates_path(self):
        bundle = self.injector.bundle("App/Feeds")

        assert bundle.path == "root/app/feeds"
        assert self.injector.bundle("app/feeds") is bundle
        assert self.injector.bundle("app").child("feeds") is bundle

    def test_bundle_without_create(self):
        assert self.injector.bundle("app", create=False) is None

        self.injector.bundle("app")

        assert self.injector.bundle("app", create=False) is not None
        assert self.injector.bundle("app/feeds", create=False) is None

    def test_invalid_path_rejected(self):
        with pytest.raises(ValidationError, match="empty chunks"):
            self.injector.bundle("app//feeds")

        with pytest.raises(ValidationError, match="empty spaces"):
            self.injector.bundle("app/my feeds")

    def test_container_for_existing_domain(self):
        self.injector.bundle("app")

        container = self.injector.container("app")

        assert isinstance(container, Container)
        assert container.bundle is self.injector.bundle("app")
        assert container.metadata is self.injector.metadata

    def test_containers_are_detached(self):
        assert self.injector.container() is not self.injector.container()

    def test_container_for_missing_domain(self):
        with pytest.raises(LookupFailure, match="No bundle found for domain 'missing'.") as exc_info:
            self.injector.container("missing")

        assert exc_info.value.domain == "missing"


class TestInjectorRegistration:
    """Test explicit registration with lifecycle options."""

    def setup_method(self):
        """Set up test fixtures."""
        self.metadata = MetadataTable()
        self.injector = Injector(Configuration(), self.metadata)

    def test_register_records_metadata(self):
        name = self.injector.register(
            Starter,
            singleton=True,
            discardable=True,
            eager=["clock"],
            initializer="start",
        )

        assert name == "starter"
        assert self.metadata.is_singleton(Starter)
        assert self.metadata.is_discardable(Starter)
        assert self.metadata.get_eagers(Starter) == ["clock"]
        assert self.metadata.get_initializer(Starter) == "start"

    def test_register_in_domain(self):
        self.injector.register(Fixture, domain="app/feeds", name="feed")

        assert self.injector.bundle("app/feeds").has("feed")
        assert not self.injector.root.has("feed")

    def test_register_passes_options(self):
        self.injector.register(Fixture, name="feed", depth=3)

        descriptor = self.injector.root.get("feed")

        assert descriptor.identifier == "feed"
        assert dict(descriptor.options) == {"depth": 3}

    def test_conflict_leaves_metadata_untouched(self):
        self.injector.register(Fixture)

        with pytest.raises(RegistrationConflict):
            self.injector.register(AnotherFixture, name="Fixture", singleton=True)

        assert not self.metadata.is_singleton(AnotherFixture)

    def test_conflicting_initializer_rejected(self):
        self.injector.register(Starter, initializer="start")
        self.injector.deregister(Starter)

        with pytest.raises(ConfigurationError, match="already has an initializer named 'start'"):
            self.injector.register(Starter, initializer="restart")

    def test_same_initializer_accepted_again(self):
        self.injector.register(Starter, initializer="start")
        self.injector.deregister(Starter)

        assert self.injector.register(Starter, initializer="start") == "starter"

    def test_invalid_name_rejected(self):
        with pytest.raises(ValidationError):
            self.injector.register(Fixture, name="bad name")

    def test_deregister(self):
        self.injector.register(Fixture, domain="app")

        assert self.injector.deregister(Fixture, domain="app") is True
        assert self.injector.deregister(Fixture, domain="app") is False
        assert self.injector.deregister(Fixture, domain="missing") is False

    def test_configure_once(self):
        self.injector.configure(True)

        assert self.injector.configuration.is_strict()

        with pytest.raises(ConfigurationError, match="The configuration can only be initialized once."):
            self.injector.configure(False)


class TestDecorators:
    """Test the class and method decorators."""

    def setup_method(self):
        """Set up test fixtures."""
        self.metadata = MetadataTable()
        self.injector = Injector(Configuration(), self.metadata)

    def test_injectable_registers_and_returns_class(self):
        @injectable(injector=self.injector, domain="app", name="quotes", depth=2)
        class QuoteFeed:
            def __init__(self, options):
                self.options = options

        assert isinstance(QuoteFeed, type)
        assert self.injector.bundle("app").has("quotes")

        feed = self.injector.container("app").provide("quotes", resolve=True)

        assert isinstance(feed, QuoteFeed)
        assert feed.options == {"depth": 2}

    def test_singleton_decorator(self):
        @singleton(injector=self.injector)
        class Clock:
            pass

        container = self.injector.container()

        assert self.metadata.is_singleton(Clock)
        assert container.provide("Clock", resolve=True) is container.provide("Clock", resolve=True)

    def test_initializer_decorator(self):
        @injectable(injector=self.injector)
        class Engine:
            started = False

            @initializer
            def start(self):
                self.started = True

        assert find_initializers(Engine) == ["start"]
        assert self.metadata.get_initializer(Engine) == "start"
        assert self.injector.container().provide("Engine", resolve=True).started

    def test_more_than_one_initializer_rejected(self):
        class Engine:
            @initializer
            def start(self):
                pass

            @initializer
            def restart(self):
                pass

        with pytest.raises(ConfigurationError, match="cannot define more than one initializer") as exc_info:
            injectable(Engine, injector=self.injector)

        assert exc_info.value.suggestion == "Keep one of: start, restart"
        assert not self.injector.root.has("Engine")

    def test_decorated_circular_singletons(self):
        @singleton(injector=self.injector)
        class Orders:
            book = inject("Book")

        @singleton(injector=self.injector)
        class Book:
            orders = inject("Orders")

        container = self.injector.container()
        orders = container.provide("Orders", resolve=True)

        assert orders.book.orders is orders

    def test_only_classes_decorated(self):
        with pytest.raises(TypeError, match="can only decorate a class"):
            injectable(lambda: None, injector=self.injector)

    def test_duplicate_decoration_conflicts(self):
        injectable(Fixture, injector=self.injector)

        with pytest.raises(RegistrationConflict):
            injectable(Fixture, injector=self.injector)
