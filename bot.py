from discord.ext import commands
import discord
import logging
import os
from dotenv import load_dotenv
from listeners import register_error_listeners
from paged_message.paginator import PaginatedMessage

load_dotenv()
TOKEN = os.getenv("BOT_TOKEN")
COMMAND_PREFIX = os.getenv("COMMAND_PREFIX", "!")
PAGINATOR_TIMEOUT = float(os.getenv("PAGINATOR_TIMEOUT", 300))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

MAX_GENERATED_PAGES = 500

log = logging.getLogger("bot")

bot = commands.Bot(command_prefix=COMMAND_PREFIX, intents=discord.Intents.all(), case_insensitive=True)
bot.remove_command('help')
register_error_listeners(bot)

tree_synced = False


@bot.event
async def on_ready():
    global tree_synced
    if not tree_synced:
        await bot.tree.sync()
        tree_synced = True
    await bot.change_presence(activity=discord.Game(name=f"{COMMAND_PREFIX}help"))
    log.info("Logged in as %s", bot.user)


@bot.hybrid_command(name="help")
async def help(ctx):
    """Show what this bot can do."""
    # EMBEDS FOR HELP COMMAND
    pages = []

    # Page 1
    embed1 = discord.Embed(title="✨ Paginator Help (1/3) ✨",
                           description="Here are the commands you can use:",
                           color=discord.Color.blue())
    embed1.add_field(name="📖 Help", value=f"`{COMMAND_PREFIX}help` or `/help` — Show this menu.", inline=False)
    embed1.add_field(name="📚 Pages", value=f"`{COMMAND_PREFIX}pages <count>` — Browse `count` generated pages.", inline=False)
    pages.append(embed1)

    # Page 2
    embed2 = discord.Embed(title="✨ Paginator Help (2/3) ✨",
                           description="Navigation:",
                           color=discord.Color.blue())
    embed2.add_field(name="⏪ / ⏩", value="Jump to the first / last page.", inline=False)
    embed2.add_field(name="◀️ / ▶️", value="Previous / next page. Wraps around at the ends.", inline=False)
    embed2.add_field(name="⏹️", value="Stop listening for clicks.", inline=False)
    pages.append(embed2)

    # Page 3
    embed3 = discord.Embed(title="✨ Paginator Help (3/3) ✨",
                           description="Page select:",
                           color=discord.Color.blue())
    embed3.add_field(name="🔢", value="Pick a page from the menu. Long books only list every n-th page.", inline=False)
    pages.append(embed3)

    paginator = PaginatedMessage(pages, timeout=PAGINATOR_TIMEOUT)
    await paginator.run(ctx)


async def generated_page(index, pages, paginator):
    return discord.Embed(
        title=f"📄 Page {index + 1}/{len(pages)}",
        description="This page was built when you opened it.",
        color=discord.Color.blurple(),
    )


@bot.hybrid_command(name="pages")
async def pages(ctx, count: int = 10):
    """Browse a number of generated pages."""
    if not 1 <= count <= MAX_GENERATED_PAGES:
        await ctx.send(f"⚠️ Pick a page count between 1 and {MAX_GENERATED_PAGES}.")
        return

    paginator = PaginatedMessage(
        template={"content": f"Requested by {ctx.author.display_name}"},
        timeout=PAGINATOR_TIMEOUT,
    )
    for _ in range(count):
        paginator.add_page_builder(generated_page)
    await paginator.run(ctx)


if __name__ == "__main__":
    discord.utils.setup_logging(level=logging.getLevelName(LOG_LEVEL))
    bot.run(TOKEN, log_handler=None)
