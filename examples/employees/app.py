"""Employees API — buffered routes, a direct stream, and a static site.

Demonstrates perch with:
- A buffered route that reads the query and JSON body
- A redirect via ``emit(301, url)``
- A direct route that streams its response
- Static files from ``public/`` with ``/`` -> ``/index.html``

Run:
    python app.py
"""

from pathlib import Path

import anyio

from perch import Dispatcher, Emitter, RawRequest, RequestView, ResponseWriter, ServerConfig

PUBLIC_DIR = Path(__file__).parent / "public"

EMPLOYEES = {
    "1": {"id": "1", "name": "John Smith"},
    "2": {"id": "2", "name": "Jane Doe"},
}

dispatcher = Dispatcher(ServerConfig(base_dir=PUBLIC_DIR, log_level="debug"))


@dispatcher.route("/api/employees")
def employees(view: RequestView, emit: Emitter) -> None:
    if view.method == "post":
        employee = view.json()
        EMPLOYEES[employee["id"]] = employee
        emit(201, employee)
        return

    employee_id = view.query.get_first("id")
    if employee_id is None:
        emit(200, list(EMPLOYEES.values()))
    elif employee_id in EMPLOYEES:
        emit(200, EMPLOYEES[employee_id])
    else:
        emit(404, {"error": f"no employee {employee_id}"})


@dispatcher.route("/docs")
def docs(view: RequestView, emit: Emitter) -> None:
    emit(301, "https://example.com/docs")


@dispatcher.direct("/api/ticks")
async def ticks(request: RawRequest, writer: ResponseWriter) -> None:
    await writer.write_head(200, {"Content-Type": "text/plain; charset=utf-8"})
    for n in range(5):
        await writer.write(f"tick {n}\n")
        await anyio.sleep(0.5)
    await writer.end("done\n")


if __name__ == "__main__":
    dispatcher.run()
