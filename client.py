# client.py
import requests
from zeep import Client
from zeep.exceptions import Error as ZeepError

from log_setup import get_logger

logger = get_logger("client")

# errors that mean "couldn't talk to the server", as opposed to an rc
TRANSPORT_ERRORS = (requests.exceptions.RequestException, ZeepError, OSError)


def wsdl_url(host_port):
    return f"http://{host_port}/?wsdl"


def connect(host_port):
    return Client(wsdl=wsdl_url(host_port))


def register(host_port, course, student_id, name):
    """
    Enroll a student in two steps:
      1) request_code(course, student_id) -> rc 0 = add code received,
         1 = invalid course, 2 = invalid ID
      2) register(add_code, student_id, name) -> rc 0 = success,
         1 = invalid code, 2 = code does not match ID
    """
    try:
        svc = connect(host_port).service

        res = svc.request_code(course, student_id)
        if res.rc != 0:
            print(f"problem getting add code: {res.rc}")
            return res.rc

        rc = svc.register(res.add_code, student_id, name)
    except TRANSPORT_ERRORS as e:
        logger.debug("register via %s failed: %s", host_port, e)
        print(f"problem communicating with {host_port}")
        return None

    if rc == 0:
        print("registration successful")
    else:
        print(f"problem registering: {rc}")
    return rc


def list_students(host_port, course):
    """Print `code student_id name` for every registration, by ascending ID."""
    try:
        res = connect(host_port).service.list(course)
    except TRANSPORT_ERRORS as e:
        logger.debug("list via %s failed: %s", host_port, e)
        print(f"problem communicating with {host_port}")
        return None

    if res.rc != 0:
        print(f"problem listing students: {res.rc}")
        return res.rc

    for s in sorted(res.registrations or [], key=lambda s: s.student_id):
        # zeep decodes an empty name as None
        print(s.add_code, s.student_id, s.name or "")
    return 0
