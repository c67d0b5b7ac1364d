# qanda

A small HTTP service for questions and answers, built on Starlette and
served with uvicorn. Questions live in an in-memory store that can be
seeded from a JSON file; they can be listed, paged, fetched, added,
updated and deleted. Answers are posted as URL-encoded forms.

The package also has a tiny greeting server and a client that fetches a
URL and prints a summary of the response.

## Installing

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## The `qanda` command

    qanda [serve|hello|fetch] [--host HOST] [--port PORT] [--questions FILE] [--url URL]

- `qanda` or `qanda serve` runs the question service on `127.0.0.1:3030`.
  The store starts empty; `--questions FILE` seeds it from a JSON object
  that maps question ids to questions. A file that cannot be read or
  decoded is reported on standard error and the command exits with 1.
- `qanda hello` runs a server on `127.0.0.1:1337` that answers every GET
  request, on any path, with the text `m+z-cycles`.
- `qanda fetch` sends a GET request to `--url` (default
  `http://localhost:1337`) and prints the URL, status and headers of the
  response. A failed request is reported on standard error and the
  command exits with 1.

`--host` and `--port` change where `serve` and `hello` listen.

## Routes

| Method | Path                       | What it does                                        |
|--------|----------------------------|-----------------------------------------------------|
| GET    | `/questions`               | All questions as a JSON list                        |
| GET    | `/questions?start=0&end=2` | A slice of the questions                            |
| GET    | `/questions/{id}`          | One question                                        |
| POST   | `/questions`               | Add a question from a JSON body (`Question added!`) |
| PUT    | `/questions/{id}`          | Replace a question with a JSON body (`Question updated!`) |
| DELETE | `/questions/{id}`          | Remove a question (`Question deleted`)              |
| POST   | `/answers`                 | Add an answer from form fields `id`, `content`, `questionId` (`Answer added`) |

A question looks like this:

    {"id": "1", "title": "First Question", "content": "Content of Question", "tags": ["faq"]}

`tags` may be `null` or left out.

### Paging

Any query string on `GET /questions` turns paging on, and paging needs
both `start` and `end`. They are non-negative integers (an optional
leading `+` is accepted). If `start` is larger than `end` the two are
swapped, and `end` is cut down to the number of questions. The result is
the questions from `start` up to, but not including, `end`.

### Errors

Errors come back as plain text:

- `416 Range Not Satisfiable` for a bad paging value
  (`Cannot parse parameter: ...`), a missing paging parameter or answer
  field (`Missing parameter`), or a question that does not exist
  (`Question not found`);
- `422 Unprocessable Entity` when a body cannot be read as a question or
  a form (`Request body deserialize error: ...`);
- `403 Forbidden` when a cross-origin preflight is refused
  (`CORS request forbidden: ...`);
- `404 Not Found` for any other routing failure, including an unknown
  path or a method a path does not take.

### Cross-origin requests

Requests with an `Origin` header are accepted from any origin, and the
origin is echoed in `access-control-allow-origin`. A preflight
(`OPTIONS` with `access-control-request-method`) is allowed only for the
`PUT` and `DELETE` methods and the `content-type` header.

## Using it from Python

    from qanda.app import create_app
    from qanda.store import Store, load_questions
    from qanda.types import Question

    store = Store({})
    store.add_question(Question.from_dict(
        {"id": "7", "title": "Title", "content": "Body", "tags": None}
    ))
    app = create_app(store)

`app` is an ASGI application that any ASGI server can run.
`load_questions(text)` decodes a JSON object of questions into a mapping
that `Store` accepts. `create_hello_app(message)` builds the greeting
server and `fetch(url)` is the client behind `qanda fetch`.

Other pieces:

- `qanda.types`: `Question`, `Answer`, `Pagination`, `extract_pagination`,
  `parse_question_id`, `sample_question`;
- `qanda.store`: `Store` with `all_questions`, `get_question`,
  `add_question`, `update_question`, `delete_question`, `add_answer` and
  `answers`;
- `qanda.errors`: `ApiError` and its subclasses, and `recover`, which
  gives the reply text and status for an error;
- `qanda.routes`: the request handlers and `route_table()`.

## What it does not do

The store lives in memory only. Nothing added, changed or deleted while
the server runs is written back to disk, and answers are stored but
cannot be read back over HTTP.