# micro_server.py
import threading
import time
from wsgiref.simple_server import make_server

from spyne import Application, rpc, ServiceBase, Integer, Unicode
from spyne.protocol.soap import Soap11
from spyne.server.wsgi import WsgiApplication

from log_setup import get_logger

logger = get_logger("micro_server")


# ---------------------------------------------------
# RunningTotal: process-wide accumulator for the add demo.
# Shares nothing with the registration state.
# ---------------------------------------------------
class RunningTotal:
    def __init__(self, delay=5.0):
        self.delay = delay
        self.total = 0
        self._lock = threading.Lock()

    def add(self, a, b):
        s = a + b
        with self._lock:
            self.total += s
            my_total = self.total
        # the sleep is outside the lock so overlapping calls stay visible
        if self.delay:
            time.sleep(self.delay)
        return f"{a} + {b} = {s} total {my_total}"


# ---------------------------------------------------
# AddExampleService
# ---------------------------------------------------
class AddExampleService(ServiceBase):
    @rpc(Integer, Integer, _returns=Unicode)
    def add(ctx, a, b):
        """
        Add two numbers and fold the sum into a running total kept
        for the lifetime of the server.
        """
        result = ctx.app.running_total.add(int(a or 0), int(b or 0))
        logger.debug("add: %s", result)
        return result


def build_micro_app(running_total=None):
    app = Application(
        [AddExampleService],
        tns="urn:courseregistration.micro",
        in_protocol=Soap11(validator="lxml"),
        out_protocol=Soap11(),
    )
    app.running_total = running_total if running_total is not None else RunningTotal()
    return app


# ---------------------------------------------------
# Publish the service on its own
# ---------------------------------------------------
if __name__ == "__main__":
    print("Add example SOAP server running...")
    print("URL: http://localhost:8001  (WSDL available at ?wsdl)")
    server = make_server("0.0.0.0", 8001, WsgiApplication(build_micro_app()))
    server.serve_forever()
