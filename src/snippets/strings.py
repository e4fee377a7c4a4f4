"""사용자에게 보이는 문자열."""

QUESTION = "Question"
SNIPPET_DELETE_CONFIRM = "Are you sure you want to delete this snippet?"
SNIPPET_DELETE_ALL_CONFIRM = "Are you sure you want to delete all snippets?"

FILE_ALREADY_EXISTS = "File already exists: {path}"
NOT_ABSOLUTE_PATH = "Directory is not an absolute path: {path}"
NOT_A_DIRECTORY = "{path} is not a directory!"
CANNOT_EDIT_NON_DIRECTORY = "Can't edit non-directory snippet"
INVALID_SNIPPET_NAME = "Invalid snippet name: {name!r}"
