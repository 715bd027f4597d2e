"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["register", "login", "new", "mkdir", "ls", "share", "open", "browse", "explore", "clear", "exit", "help"]

PERMISSIONS = ("public", "unlisted", "private")

EXPLORE_SORTS = ("recent", "popular", "name")

STYLE = Style.from_dict(
    {
        "prompt": "#2BA84A bold",
        "command": "#0088ff bold",
    }
)

GREEN = "\033[38;2;43;168;74m"
RESET = "\033[0m"

LOGO = f"""{GREEN}
 ███████╗██╗  ██╗ █████╗ ██████╗ ███████╗███╗   ██╗ ██████╗ ████████╗███████╗
 ██╔════╝██║  ██║██╔══██╗██╔══██╗██╔════╝████╗  ██║██╔═══██╗╚══██╔══╝██╔════╝
 ███████╗███████║███████║██████╔╝█████╗  ██╔██╗ ██║██║   ██║   ██║   █████╗
 ╚════██║██╔══██║██╔══██║██╔══██╗██╔══╝  ██║╚██╗██║██║   ██║   ██║   ██╔══╝
 ███████║██║  ██║██║  ██║██║  ██║███████╗██║ ╚████║╚██████╔╝   ██║   ███████╗
 ╚══════╝╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝╚═╝  ╚═══╝ ╚═════╝    ╚═╝   ╚══════╝
{RESET}"""

WELCOME_TITLE = "ShareNote CLI - Notes, files and shared folders"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "sharenote> "

HELP_TEXT = """Available commands:
  register <username> <password> [display-name]   Register new user account
  login <username> <password>                     Login and get API key
  new <title> [options]                           Create a note
      --body TEXT | --file LOCAL_PATH             Note content (inline or read from a local file)
      --path PATH                                 Location in your tree (default: /<slug>)
      --permission public|unlisted|private        Visibility (default: private)
      --slug SLUG                                 Custom slug
  mkdir <path> [--permission LEVEL]               Create a folder at path
  ls [path]                                       List your own files and folders (default: /)
  share <content-id> [--slug SLUG] [--public|--unlisted]
                                                  Show or change share links
  open <slug-or-code>                             Read shared content
  browse <folder-slug-or-code> [path]             List a shared folder
  explore [recent|popular|name] [limit]           List public content
  clear                                           Clear screen and redisplay welcome message
  help                                            Show this help
  exit                                            Exit REPL

Examples:
  register alice mypassword123 "Alice Doe"
  new "My First Note" --body "hello" --permission public
  mkdir /projects
  new "plan.md" --file notes/plan.md --path /projects/plan.md
  share 3f2a9c1e-... --slug project-plan --unlisted
  open project-plan
  browse projects /
  explore popular 10"""
