"""Handles interactive/command-line mode for typedlc interpreter. Uses cmd as backend."""

import cmd

from typedlc.lang import printer
from typedlc.lang.error import GenericException
from typedlc.lang.lexical import needs_continuation


class Shell(cmd.Cmd):
    """Typed lambda calculus interpreter shell."""
    intro = "Typed lambda calculus interpreter :: Python backend\nType ':help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations
    clear_screen = "\x1b[2J\x1b[1;1H"  # ANSI: erase display, cursor home
    pause_prompt = "Paused: Enter to step"

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary typedlc statements, or a ':' command."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            if not self._tmp_line and line.strip().startswith(":"):
                return self.command(line.strip()[1:])

            self.line_num += 1
            line = self._tmp_line + line

            if needs_continuation(line):
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
                return False

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.add(line, self.line_num)
            self.sess.run()
            self.print_results()
        return False

    def print_results(self):
        while self.sess.results:
            print(self.sess.pop())

    def command(self, line):
        """Runs ':'-prefixed command line (given without its ':'). Returns True if the shell should exit."""
        name, __, arg = line.partition(" ")
        arg = arg.strip()

        if name in ("q", "quit"):
            return self.do_exit("")

        elif name == "load":
            if not arg:
                raise GenericException("usage: :load FILE")
            self.sess.load(arg)
            self.sess.run()
            self.print_results()

        elif name == "std":
            self.sess.load(self.sess.std_path if self.sess.std_path else self.sess.STD_FILE)
            self.sess.run()

        elif name == "env":
            if arg == "clear":
                self.sess.reset()
            else:
                for definition in self.sess.definitions():
                    print(definition)

        elif name == "type":
            if not arg:
                raise GenericException("usage: :type TERM")
            print(printer.render_type(self.sess.infer(arg)))

        elif name == "dbg":
            if not arg:
                raise GenericException("usage: :dbg PROGRAM")
            self.line_num += 1
            self.sess.add(arg, self.line_num)
            self.sess.run(on_step=self.pause)
            self.print_results()

        elif name in ("cls", "clear"):
            print(self.clear_screen, end="", flush=True)

        elif name == "help":
            self.do_help("")

        else:
            raise GenericException("unknown command ':{}', try :help", name, diagnosis=False)

        return False

    def pause(self, rule, term):
        """Prints a reduction step and waits for Enter (used by :dbg)."""
        self.sess.error_handler.show_step(rule, term)
        input(self.pause_prompt)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the typedlc interpreter!\n\n"
              "Statements are lambda terms (λx.x or \\x.x), bindings (I = λx.x), typed bindings\n"
              "(Not : Bool -> Bool = ...) and type aliases (type Binary = * -> * -> *). Terms are\n"
              "reduced to normal form; unknown names are left as they are. The standard library\n"
              "(True, False, And, Add, Mul, Pair, ...) is loaded unless --no-std is given.\n\n"
              "Commands:\n"
              "  :load FILE   load and run a file\n"
              "  :std         load the standard library\n"
              "  :env         print the current environment\n"
              "  :env clear   clear the current environment\n"
              "  :type TERM   print the type of a term\n"
              "  :dbg PROG    run PROG, pausing on every reduction step\n"
              "  :cls, :clear clear the screen\n"
              "  :help        print this message\n"
              "  :q, :quit    exit the interpreter")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
