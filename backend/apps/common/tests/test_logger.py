import logging
import unittest
from decimal import Decimal

from apps.common import get_logger


class AppLoggerTests(unittest.TestCase):
    def test_bound_context_is_rendered_after_message(self):
        log = get_logger("apps.tests.logger").bind(component="carts", layer="service")
        with self.assertLogs("apps.tests.logger", level="INFO") as captured:
            log.info("Cart cleared", cart_id=7, total=Decimal("12.50"))
        self.assertEqual(
            captured.records[0].getMessage(),
            "Cart cleared | component=carts layer=service cart_id=7 total=12.50",
        )

    def test_bind_does_not_mutate_parent(self):
        parent = get_logger("apps.tests.logger").bind(component="catalog")
        child = parent.bind(service="ProductService")
        self.assertEqual(parent.context, {"component": "catalog"})
        self.assertEqual(child.context, {"component": "catalog", "service": "ProductService"})

    def test_exception_attaches_traceback(self):
        log = get_logger("apps.tests.logger")
        with self.assertLogs("apps.tests.logger", level="ERROR") as captured:
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                log.exception("Unhandled", view="CartView")
        record = captured.records[0]
        self.assertEqual(record.getMessage(), "Unhandled | view=CartView")
        self.assertIsNotNone(record.exc_info)
