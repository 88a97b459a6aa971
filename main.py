from helmsman import *


@command
class Greet(Command, name="greet"):
    """say hello to someone"""

    name = Option("-n", "--name", default="world", descr="who to greet")
    times = Option("-t", "--times", type=Coercion.INTEGER, default=1, descr="how many greetings")
    verbose = Flag("-v", "--verbose", descr="also report the working directory")
    extras = Positionals(descr="extra words appended to the greeting")

    def run(self, context):
        for _ in range(self.times):
            context.stdout.print("hello, %s" % " ".join([self.name, *self.extras]))
        if self.verbose:
            context.stderr.print("greeted from %s" % context.cwd)
        return 0


if __name__ == '__main__':
    cli()
