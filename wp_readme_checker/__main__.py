from wp_readme_checker.cli.app import app

app(prog_name="wp-readme-checker")
