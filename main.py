from rich.console import Console
from rich.pretty import pprint

from parley import *

registry = Registry(prefix="/", colorful=True, fancy=True)


@registry.command("Mail", "mail", description="Allows users to send messages.")
def mail(bindings):
    pprint(bindings)


mail.add_argument(
    Argument("type", optional=True)
        .add_option(Argument("read"))
        .add_option(Argument("clear"))
        .add_option(Argument("send").add_arguments([Argument("user"), Argument("message")]))
)


@registry.command("Give", "give", "item", arguments="<user> <item> [amount](1)", access_level=1)
def give(bindings):
    pprint(dict(bindings))


if __name__ == '__main__':
    Console().print(registry.table())
    registry.parse("/mail send bob see you tomorrow")
    registry.parse("/mail bogus")
    registry.parse("/give alice sword", access_level=1)
    registry.parse("/giv alice sword")
