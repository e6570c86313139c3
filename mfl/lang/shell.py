"""Handles interactive/command-line mode for the MFL interpreter. Uses cmd as backend."""

import cmd

from mfl.lang.error import GenericException


class Shell(cmd.Cmd):
    """MFL interpreter shell."""
    intro = "MFL interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess
        self._tmp_line = ""

    def onecmd(self, line):
        """Sends continuation lines to default, even if they start with a command name. EOF still exits."""
        if self._tmp_line and line != "EOF":
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary MFL statements."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._complete(line)
            if line:
                self.sess.add(line)
                self.sess.run()

    def do_tree(self, arg):
        """Displays the syntax tree of a statement without running it."""
        with self.sess.error_handler:
            line = self._complete(arg)
            if line:
                self.sess.add(line)
                print(self.sess.display())
                self.sess.to_exec.clear()

    def do_help(self, arg):
        """Prints a short intro rather than the command docs."""
        print("Welcome to the MFL interpreter!\n\n"
              "MFL is a small expression language with integers, reals and booleans. Every \n"
              "statement ends with ';' (added for you here if you forget it).\n\n"
              "Try it out by typing 'val x := 3'. This will bind the value 3 to the name 'x'. \n"
              "Next, try typing 'x * 2.5 > 7'. This will print 'true'. Type 'tree' followed \n"
              "by a statement to see how it is parsed.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            with self.sess.error_handler:
                raise GenericException("unrecognized token: '{}'", arg)
            return False
        return True

    def _complete(self, line):
        """Returns the complete statement(s) typed so far, or "" if the line continues on the next one."""
        line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

        if add_to_prev:
            self._tmp_line = line
            self.prompt = self.secondary_prompt
            return ""

        self._tmp_line = ""
        self.prompt = self._tmp_prompt
        return line
