# coursetools

coursetools works with training courses written as Markdown books: a
`SUMMARY.md` listing the chapters, and one Markdown file per chapter. It reads
YAML frontmatter from the chapters, builds a course → session → segment →
slide hierarchy from it, and provides command-line tools built on that
hierarchy.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Frontmatter

A chapter may start with a YAML block:

```
---
course: Fundamentals
session: Day 1 Morning
target_minutes: 180
minutes: 5
---
```

- `course` starts a new course and resets the session. `course: none` marks
  the following chapters as belonging to no course.
- `session` starts (or returns to) a session in the current course. A chapter
  that is inside a course must have a session; `course` without `session`
  raises `CourseStructureError`.
- `minutes` is the teaching time of a slide (a non-negative integer).
- `target_minutes` adds to the planned length of the session
  (a non-negative integer).

Badly formed YAML, or values of the wrong type, raise `FrontmatterError`.

Each top-level chapter in a session becomes a segment and is also that
segment's first slide. Its sub-chapters become further slides, and anything
nested below a sub-chapter is counted as part of that slide. Sub-slides may
not set `course` or `session`.

A session's duration is the sum of its segments plus a 10-minute break between
every two segments that take time. Durations are shown rounded up to the next
multiple of 5 minutes once they are longer than 5 minutes.

## Commands

### `mdbook-course`

A book preprocessor. It reads a `[context, book]` JSON pair on standard input,
strips the frontmatter from every chapter, and then for each chapter:

- if the chapter is the first chapter of a slide that takes time and it
  contains `<details>`, inserts a line such as
  `This slide should take about 10 minutes.` at the start of the speaker notes;
- expands these directives in chapters that have a source path:
  - `{{%session outline}}` – a table of the session's segments,
  - `{{%segment outline}}` – a table of the segment's slides,
  - `{{%course outline}}` – the schedule of the current course,
  - `{{%course outline NAME}}` – the schedule of the named course, or
    `not found - …` if there is none.

  Any other `{{%…}}` directive is replaced by its own text.

The processed book is written as JSON on standard output. Invalid input is
reported on standard error with exit status 1.
`mdbook-course supports <renderer>` exits with status 0 for every renderer.

### `course-schedule`

Run in the book's root directory. It loads `src/SUMMARY.md` and prints, for
each session, its duration compared with its target (more than 15 minutes off
is flagged) and the duration of each segment. `course-schedule pr` prints a
shorter per-course and per-session summary meant for a pull request
description. The `sessions` and `segments` subcommands both print the session
summary. Output stops at the first course whose target duration is zero.

### `course-content`

Run in the book's root directory. It prints the full Markdown source of every
slide, in course order, under `# COURSE:`, `# SESSION:`, `# SEGMENT:` and
`# SLIDE:` headings.

### `mdbook-exerciser`

A book renderer. It reads the render context JSON on standard input and takes
the output directory from `output.exerciser.output-directory`. That directory
is removed and created afresh. A comment of the form
`<!-- File path/to/file -->` names the file that the next code block (fenced or
indented) is written to; code blocks without such a comment are ignored. Each
chapter's files go into a subdirectory named after the stem of the chapter's
path.

### `mdbook-slide-evaluator`

Opens every `.html` file below a directory in a W3C WebDriver session, finds
an element by XPath (default `//*[@id="content"]/main`), measures it, and
checks it against a maximum width and height:

```
mdbook-slide-evaluator --webdriver http://localhost:4444 \
    --width 750 --height 1333 --violations-only book/html
```

Options:

- `--webdriver URL` – the WebDriver server (default `http://localhost:4444`)
- `--element XPATH` – the element to measure
- `--base-url URL` – prefix under which the files are opened (default `file:///`)
- `--webclient-width`, `--webclient-height` – browser window size
  (default 1920×1080)
- `--width`, `--height` – the limits (default 750 and 1333)
- `--violations-only` – report only slides that break a limit
- `-s`, `--screenshot-dir DIR` – store a PNG of each measured element
- `--export FILE` – write CSV instead of printing; an existing file is only
  replaced with `--overwrite`

Pages without the element are skipped. Ctrl+C stops the run and reports the
slides evaluated so far. Run without arguments, the command prints its help.

## Library use

```python
from coursetools.frontmatter import Book
from coursetools.course import Courses
from coursetools.markdown import duration

book = Book.from_json(data)
courses, book = Courses.extract_structure(book)
for course in courses:
    print(course.name, duration(course.minutes()))
    print(course.schedule())
```

Other building blocks: `coursetools.markdown` (`relative_link`, `duration`,
`Table`), `coursetools.content.load_book`, `coursetools.exerciser.process`,
`coursetools.slides.SlideBook` and `coursetools.evaluator` (`Evaluator`,
`SlidePolicy`, `WebDriverClient`, `EvaluationResults`).

`coursetools.examples` holds a few small worked examples: `greeting`,
`analyze_numbers`, a `BirthdayService` that builds birthday wishes, and a
`VirtioBlockRequest` whose `as_bytes()` gives its little-endian layout.

## What it does not do

- It does not render books to HTML; the preprocessor and the exerciser expect
  a book tool to hand them the book as JSON.
- `course-content` and `course-schedule` read only `src/SUMMARY.md` and the
  chapter files it links; they understand list items, plain links, headings
  and `---` separators, and ignore any book configuration file.
- `mdbook-slide-evaluator` does not start a browser; it needs a running
  WebDriver server.