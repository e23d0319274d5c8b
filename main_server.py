# main_server.py
from socketserver import ThreadingMixIn
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from spyne import Application, rpc, ServiceBase, Unicode, Integer, Boolean, ComplexModel
from spyne.protocol.soap import Soap11
from spyne.server.wsgi import WsgiApplication

from log_setup import get_logger
from micro_server import AddExampleService, RunningTotal
from registrar import Registrar
from server_config import ServerConfig
from validation import is_valid_course, is_valid_student_id

logger = get_logger("main_server")
access_logger = get_logger("access")

# ------------------------
# Types
# ------------------------
class StudentRecord(ComplexModel):
    add_code = Integer
    student_id = Integer
    name = Unicode

class CodeResponse(ComplexModel):
    rc = Integer
    add_code = Integer

class ListResponse(ComplexModel):
    rc = Integer
    registrations = StudentRecord.customize(max_occurs="unbounded")

# ------------------------
# Utility Service (stateless checks)
# ------------------------
class UtilityService(ServiceBase):
    @rpc(Unicode, _returns=Boolean)
    def validate_course(ctx, course):
        return is_valid_course(course, ctx.app.registrar.courses)

    @rpc(Integer, _returns=Boolean)
    def validate_student_id(ctx, student_id):
        r = ctx.app.registrar
        return is_valid_student_id(student_id, r.student_id_min, r.student_id_max)

# ------------------------
# Registration Service
#   request_code -> rc 0 = add code received, 1 = invalid course, 2 = invalid ID
#   register     -> rc 0 = success, 1 = invalid code, 2 = code does not match ID
#   list         -> rc 0 = success, 1 = invalid course
# Validation failures are reported in rc, never as SOAP faults.
# ------------------------
class RegistrationService(ServiceBase):
    @rpc(Unicode, Integer, _returns=CodeResponse)
    def request_code(ctx, course, student_id):
        rc, code = ctx.app.registrar.request_code(course, student_id)
        return CodeResponse(rc=rc, add_code=code)

    @rpc(Integer, Integer, Unicode, _returns=Integer)
    def register(ctx, add_code, student_id, name):
        return ctx.app.registrar.register(add_code, student_id, name or "")

    @rpc(Unicode, _returns=ListResponse)
    def list(ctx, course):
        """
        Every registration on the server, whichever valid course is asked
        for: the roster is not split by course.
        """
        rc, roster = ctx.app.registrar.list_roster(course)
        return ListResponse(
            rc=rc,
            registrations=[
                StudentRecord(add_code=r.code, student_id=r.student_id, name=r.name)
                for r in roster
            ],
        )

# ------------------------
# Expose registration, utility and add services in one SOAP endpoint
# ------------------------
def build_application(registrar=None, running_total=None):
    app = Application(
        services=[RegistrationService, UtilityService, AddExampleService],
        tns="urn:courseregistration.main",
        in_protocol=Soap11(validator="lxml"),
        out_protocol=Soap11(),
    )
    app.registrar = registrar if registrar is not None else Registrar()
    app.running_total = running_total if running_total is not None else RunningTotal()
    return app


def build_from_config(config: ServerConfig):
    registrar = Registrar(
        courses=config.courses,
        student_id_min=config.student_id_min,
        student_id_max=config.student_id_max,
    )
    return build_application(registrar, RunningTotal(delay=config.add_delay_seconds))

# ------------------------
# Threaded WSGI server: one thread per inbound call
# ------------------------
class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


class LoggingRequestHandler(WSGIRequestHandler):
    def log_message(self, format, *args):
        access_logger.debug("%s - %s", self.address_string(), format % args)


def make_registration_server(host, port, app):
    """Bind and return the server; raises OSError if the port can't be used."""
    return make_server(
        host, port, WsgiApplication(app),
        server_class=ThreadingWSGIServer,
        handler_class=LoggingRequestHandler,
    )


def serve(port=None, config: ServerConfig = None, host=None) -> int:
    """Run the server until interrupted. Returns a process exit status.

    `port` and `host` default to PORT and HOST from the config.
    """
    config = config or ServerConfig()
    host = host or config.host
    if port is None:
        port = config.port
    try:
        server = make_registration_server(host, port, build_from_config(config))
    except OSError as e:
        print(f"couldn't serve on {port}")
        logger.error("bind to %s:%s failed: %s", host, port, e)
        return 1

    print(f"Registration SOAP server on http://{host}:{server.server_port}  (WSDL at ?wsdl)")
    print("Services: RegistrationService, UtilityService, AddExampleService")
    logger.info("serving courses %s on %s:%d", ", ".join(config.courses), host, server.server_port)
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("shutting down")
    return 0


if __name__ == "__main__":
    raise SystemExit(serve())
