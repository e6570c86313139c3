"""Session control for the MFL language. Loads program source, either from a file or from a string, parses it and
runs it, in file/string mode or in command-line mode.
"""

from mfl.lang.error import GenericException
from mfl.lang.evaluator import Evaluator
from mfl.syntax.parser import Parser
from mfl.syntax.stream import CharacterStream


class Session:
    """Governs an MFL session. One Evaluator, hence one environment, lives as long as the session does."""
    SH_FILE = "<in>"       # command-line interpreter filename
    STR_FILE = "<string>"  # filename for programs passed in as strings

    def __init__(self, error_handler, path, source=None, cmd_line=False, sink=print):
        self.error_handler = error_handler

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.evaluator = Evaluator(sink)
        self.to_exec = []  # parsed SyntaxTrees waiting to be run

        if self.cmd_line:
            self.error_handler.fatal = False

        if source is None and path not in (Session.SH_FILE, Session.STR_FILE):
            source = CharacterStream.from_file(path).source
        elif source is None and not cmd_line:
            raise GenericException("'{}' is a reserved filename", path, diagnosis=False)

        if source is not None:
            self.add(source)

    @staticmethod
    def preprocess_line(line, add_to_prev=""):
        """Preprocesses a line from the command-line. Returns the line, followed by whether or not it needs to be
        continued on the next line (unbalanced parentheses). A missing trailing ';' is added to complete lines.
        """
        line = (add_to_prev + " " + line if add_to_prev else line).strip()
        if line.count("(") > line.count(")"):
            return line, True

        if line and not line.endswith(";"):
            line += ";"
        return line, False

    def add(self, source):
        """Parses source and queues it for execution. Parsing is complete before anything is run."""
        self.error_handler.register_source(self.path, source)  # in case error is raised
        self.to_exec.append(Parser.from_source(source).parse())

    def run(self):
        """Runs every queued program in order and returns the formatted results of this run. Will raise any errors
        that are encountered.
        """
        results = []
        while self.to_exec:
            tree = self.to_exec.pop(0)
            results += self.evaluator.run(tree)

        self.error_handler.remove_source(self.path)  # error was not raised
        return results

    def display(self):
        """Returns the tree display of every queued program."""
        return "\n".join(tree.display() for tree in self.to_exec)
