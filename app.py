from projectbridge.ui.gradio_app import demo

if __name__ == "__main__":
    demo.launch()
